import random
from typing import List, TypeVar

T = TypeVar("T")


def shuffle_movies(movies: List[T], rng: random.Random) -> List[T]:
    # Random.shuffle is Fisher-Yates: every permutation is equally likely
    shuffled = list(movies)
    rng.shuffle(shuffled)
    return shuffled
