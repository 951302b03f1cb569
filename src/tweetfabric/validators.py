# tweetfabric/validators.py
"""Client-side validation of parameter objects.

Every request passes through `ParametersValidator.validate` before anything is
sent. Validation is declarative: `PARAMETER_RULES` lists, per parameter type,
which fields identify the target and which field (if any) is capped by a
`TwitterLimits` ceiling. Errors name the offending field so the caller can fix
the call without reading the source.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from .config import TwitterLimits
from .exceptions import (
    TwitterArgumentError,
    TwitterArgumentLimitError,
    UninitializedSessionError,
)
from .identifiers import TweetIdentifier, UserIdentifier
from .log_config import logger
from .parameters import (
    DestroyRetweetParameters,
    DestroyTweetParameters,
    GetFavoriteTweetsParameters,
    GetFollowerIdsParameters,
    GetFriendIdsParameters,
    GetRetweeterIdsParameters,
    GetRetweetsParameters,
    GetTweetParameters,
    GetTweetsParameters,
    GetUserParameters,
    GetUsersParameters,
    PublishRetweetParameters,
    PublishTweetParameters,
    TwitterParameters,
)

if TYPE_CHECKING:
    from .session import TwitterClient


class ParameterRules(NamedTuple):
    """Validation descriptor of one operation.

    Attributes:
        required_fields: Fields that must be present. A tuple entry lists
            alternatives of which at least one must be present.
        limit_field: Numeric field capped by a ceiling, if any.
        limit_name: Name of the `TwitterLimits` field holding the ceiling.
        limit_description: Subject used in the error message.
    """

    required_fields: tuple[str | tuple[str, ...], ...]
    limit_field: str | None = None
    limit_name: str | None = None
    limit_description: str = "page size"


PARAMETER_RULES: dict[type[TwitterParameters], ParameterRules] = {
    GetTweetParameters: ParameterRules(("tweet",)),
    GetTweetsParameters: ParameterRules(("tweets",)),
    PublishTweetParameters: ParameterRules((("text", "media_ids"),)),
    DestroyTweetParameters: ParameterRules(("tweet",)),
    GetRetweetsParameters: ParameterRules(
        ("tweet",), "page_size", "TWEETS_GET_RETWEETS_MAX_SIZE"
    ),
    PublishRetweetParameters: ParameterRules(("tweet",)),
    DestroyRetweetParameters: ParameterRules(("tweet",)),
    GetRetweeterIdsParameters: ParameterRules(
        ("tweet",), "page_size", "TWEETS_GET_RETWEETER_IDS_MAX_PAGE_SIZE"
    ),
    GetFavoriteTweetsParameters: ParameterRules(
        ("user",), "page_size", "TWEETS_GET_FAVORITE_TWEETS_MAX_SIZE"
    ),
    GetUserParameters: ParameterRules(("user",)),
    GetUsersParameters: ParameterRules(("users",)),
    GetFollowerIdsParameters: ParameterRules(
        ("user",), "page_size", "USERS_GET_FOLLOWER_IDS_PAGE_MAX_SIZE"
    ),
    GetFriendIdsParameters: ParameterRules(
        ("user",), "page_size", "USERS_GET_FRIEND_IDS_PAGE_MAX_SIZE"
    ),
}


def rules_for(
    parameters: TwitterParameters,
    rules: Mapping[type[TwitterParameters], ParameterRules] = PARAMETER_RULES,
) -> ParameterRules:
    """Return the rules registered for the parameters' type or its closest base."""
    for cls in type(parameters).__mro__:
        if cls in rules:
            return rules[cls]
    raise TwitterArgumentError(
        "parameters",
        f"No validation rules are registered for {type(parameters).__name__}.",
    )


class RequiredParametersValidator:
    """Checks that the identifying fields of a parameter object are usable.

    Raises `TwitterArgumentError` on the first missing, empty, or non-positive
    identifier. Has no side effects.
    """

    def __init__(
        self,
        rules: Mapping[type[TwitterParameters], ParameterRules] = PARAMETER_RULES,
    ):
        self._rules = rules

    def validate(self, parameters: TwitterParameters | None) -> None:
        if parameters is None:
            raise TwitterArgumentError("parameters", "parameters cannot be None.")

        rules = rules_for(parameters, self._rules)
        for required in rules.required_fields:
            if isinstance(required, tuple):
                self._validate_alternatives(parameters, required)
            else:
                self._validate_value(getattr(parameters, required), f"parameters.{required}")

    def _validate_alternatives(
        self, parameters: TwitterParameters, alternatives: tuple[str, ...]
    ) -> None:
        for field_name in alternatives:
            if not _is_blank(getattr(parameters, field_name)):
                return
        names = " or ".join(f"parameters.{name}" for name in alternatives)
        raise TwitterArgumentError(
            f"parameters.{alternatives[0]}", f"One of {names} is required."
        )

    def _validate_value(self, value: Any, name: str) -> None:
        if _is_blank(value):
            raise TwitterArgumentError(name)

        if isinstance(value, TweetIdentifier):
            self._validate_id(value.id, f"{name}.id")
        elif isinstance(value, UserIdentifier):
            self._validate_user(value, name)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                self._validate_value(item, f"{name}[{index}]")
        elif isinstance(value, int) and not isinstance(value, bool):
            self._validate_id(value, name)

    @staticmethod
    def _validate_id(value: int | None, name: str) -> None:
        if value is None or value <= 0:
            raise TwitterArgumentError(
                name, f"{name} must be a positive identifier, got {value!r}."
            )

    def _validate_user(self, user: UserIdentifier, name: str) -> None:
        if user.id is not None:
            self._validate_id(user.id, f"{name}.id")
            return
        if not user.screen_name or not user.screen_name.strip():
            raise TwitterArgumentError(
                name, f"{name} must have a positive id or a screen name."
            )


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | tuple | set | dict):
        return len(value) == 0
    return False


class ParametersValidator:
    """Validates parameter objects before any request is issued.

    Runs `RequiredParametersValidator`, then checks the operation's numeric
    ceiling against the limits of the bound client. The validator must be
    bound with `initialize(client)` before use; ceilings are read from the
    client's settings on every call.
    """

    def __init__(
        self,
        required_parameters_validator: RequiredParametersValidator | None = None,
        rules: Mapping[type[TwitterParameters], ParameterRules] = PARAMETER_RULES,
    ):
        self._required_parameters_validator = (
            required_parameters_validator or RequiredParametersValidator(rules)
        )
        self._rules = rules
        self._client: "TwitterClient | None" = None

    def initialize(self, client: "TwitterClient") -> None:
        self._client = client
        logger.debug(f"{type(self).__name__} bound to client {id(client)}")

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    @property
    def limits(self) -> TwitterLimits:
        if self._client is None:
            raise UninitializedSessionError(type(self).__name__)
        return self._client.settings.limits

    def validate(self, parameters: TwitterParameters | None) -> None:
        """Validate `parameters` for the operation they describe.

        Raises:
            UninitializedSessionError: If `initialize` was never called.
            TwitterArgumentError: If a required field is missing or invalid, or
                a capped field is not a positive integer.
            TwitterArgumentLimitError: If a capped field exceeds its ceiling.
        """
        limits = self.limits
        self._required_parameters_validator.validate(parameters)

        rules = rules_for(parameters, self._rules)
        if rules.limit_field is None or rules.limit_name is None:
            return

        value = getattr(parameters, rules.limit_field)
        if value is None:
            return

        parameter_name = f"parameters.{rules.limit_field}"
        if value < 1:
            raise TwitterArgumentError(
                parameter_name,
                f"{parameter_name} must be a positive integer, got {value!r}.",
            )

        ceiling = getattr(limits, rules.limit_name)
        if value > ceiling:
            raise TwitterArgumentLimitError(
                parameter_name,
                value,
                rules.limit_name,
                rules.limit_description,
                limit=ceiling,
            )
