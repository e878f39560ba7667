from movie_recommender.scenario import genres_for
from movie_recommender.state import RecState


def extract_genres(state: RecState):
    genre_set = genres_for(state["scenario"]["withWhom"])
    return {"genres": genre_set.domain, "catalog_genres": genre_set.catalog}
