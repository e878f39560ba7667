import random
from typing import Any, Dict, Mapping, Optional

from langgraph.graph import StateGraph, END
from movie_recommender.node.extract_genres import extract_genres
from movie_recommender.node.fetch_movies import FindMovies, make_fetch_movies
from movie_recommender.node.filter_movies import filter_movies
from movie_recommender.node.present_movies import present_movies
from movie_recommender.node.shuffle_movies import shuffle_movies
from movie_recommender.scenario import Scenario
from movie_recommender.state import RecState


def build_graph(find_movies: FindMovies, rng: random.Random, fallback_enabled: bool = False, limit: int = 20):
    def filter_node(state: RecState):
        filtered = filter_movies(state["candidates"], state["scenario"].get("showOnly"))
        return {"filtered": filtered, "total": len(filtered)}

    def shuffle_node(state: RecState):
        return {"shuffled": shuffle_movies(state["filtered"], rng)}

    def present_node(state: RecState):
        return {"recommendations": present_movies(state["shuffled"])}

    graph = StateGraph(RecState)

    graph.add_node("genres", extract_genres)
    graph.add_node("fetch", make_fetch_movies(find_movies, rng, fallback_enabled, limit=limit))
    graph.add_node("filter", filter_node)
    graph.add_node("shuffle", shuffle_node)
    graph.add_node("present", present_node)

    graph.set_entry_point("genres")
    graph.add_edge("genres", "fetch")
    graph.add_edge("fetch", "filter")
    graph.add_edge("filter", "shuffle")
    graph.add_edge("shuffle", "present")
    graph.add_edge("present", END)

    return graph.compile()


def recommend(
    scenario: Scenario,
    find_movies: FindMovies,
    rng: Optional[random.Random] = None,
    fallback_enabled: bool = False,
    limit: int = 20,
) -> Dict[str, Any]:
    """Run the pipeline for an already validated scenario and shape the response body.

    Raises the RecommendationError subclasses from utils.errors; the caller turns
    them into HTTP responses.
    """
    app_graph = build_graph(find_movies, rng or random.Random(), fallback_enabled, limit=limit)
    result: Mapping[str, Any] = app_graph.invoke({"scenario": scenario.to_dict()})

    return {
        "success": True,
        "scenario": scenario.to_dict(),
        "recommendations": result["recommendations"],
        "total": result["total"],
        "metadata": {
            "source": result["source"],
            "genres": result["genres"],
            "catalogGenres": result["catalog_genres"],
            "page": result.get("page"),
            "sort": result.get("sort"),
        },
    }
