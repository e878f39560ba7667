from model.user import User
from model.revoked_token import RevokedToken
from model.history import RecommendationHistory, WatchedMovie
