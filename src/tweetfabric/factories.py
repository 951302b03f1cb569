# tweetfabric/factories.py
"""Conversion of DTOs into `Tweet` and `User` domain objects."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .config import TweetMode
from .dto import TweetDTO, UserDTO
from .entities import Tweet, User

if TYPE_CHECKING:
    from .session import TwitterClient


class TweetFactory:
    @staticmethod
    def generate_tweet_from_dto(
        tweet_dto: TweetDTO | None,
        tweet_mode: TweetMode | None = None,
        client: "TwitterClient | None" = None,
    ) -> Tweet | None:
        if tweet_dto is None:
            return None
        return Tweet(tweet_dto, tweet_mode, client)

    @staticmethod
    def generate_tweets_from_dtos(
        tweet_dtos: Iterable[TweetDTO] | None,
        tweet_mode: TweetMode | None = None,
        client: "TwitterClient | None" = None,
    ) -> list[Tweet]:
        if tweet_dtos is None:
            return []
        return [Tweet(dto, tweet_mode, client) for dto in tweet_dtos if dto is not None]


class UserFactory:
    @staticmethod
    def generate_user_from_dto(
        user_dto: UserDTO | None, client: "TwitterClient | None" = None
    ) -> User | None:
        if user_dto is None:
            return None
        return User(user_dto, client)

    @staticmethod
    def generate_users_from_dtos(
        user_dtos: Iterable[UserDTO] | None, client: "TwitterClient | None" = None
    ) -> list[User]:
        if user_dtos is None:
            return []
        return [User(dto, client) for dto in user_dtos if dto is not None]
