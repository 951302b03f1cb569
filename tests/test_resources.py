# tests/test_resources.py
"""Tests for the TweetsClient and UsersClient façades."""

import pytest

from tweetfabric.config import TweetMode
from tweetfabric.dto import TweetDTO
from tweetfabric.entities import Tweet, User
from tweetfabric.exceptions import (
    NotFoundError,
    TwitterArgumentError,
    TwitterArgumentLimitError,
    TwitterOperationError,
)
from tweetfabric.parameters import (
    DestroyTweetParameters,
    GetFavoriteTweetsParameters,
    GetFriendIdsParameters,
    GetRetweeterIdsParameters,
    GetTweetParameters,
)


def sent_requests(send_mock):
    return [call.args[0] for call in send_mock.await_args_list]


# --- Point operations ---


@pytest.mark.asyncio
async def test_get_tweet_returns_domain_object(twitter_client, queue_responses):
    send = queue_responses({"id": 42, "text": "hi"})

    tweet = await twitter_client.tweets.get_tweet(GetTweetParameters(42))

    assert isinstance(tweet, Tweet)
    assert tweet.id == 42
    assert tweet.text == "hi"
    assert tweet.client is twitter_client
    assert sent_requests(send)[0].params["id"] == 42


@pytest.mark.asyncio
async def test_get_tweet_accepts_primitives(twitter_client, queue_responses, tweet_payload):
    send = queue_responses(tweet_payload, tweet_payload)

    by_id = await twitter_client.tweets.get_tweet(42)
    by_dto = await twitter_client.tweets.get_tweet(by_id.tweet_dto)

    assert by_id == by_dto
    assert by_id.created_by.screen_name == "jack"
    assert by_id.created_at.year == 2018
    assert [r.params["id"] for r in sent_requests(send)] == [42, 42]


@pytest.mark.asyncio
async def test_get_tweet_sends_configured_tweet_mode(twitter_client, queue_responses):
    send = queue_responses({"id": 1, "text": "short…", "full_text": "the long text"})

    tweet = await twitter_client.tweets.get_tweet(1)

    assert sent_requests(send)[0].params["tweet_mode"] == "extended"
    assert tweet.tweet_mode is TweetMode.EXTENDED
    assert tweet.text == "the long text"


@pytest.mark.asyncio
async def test_get_tweet_without_payload_is_an_operation_error(
    twitter_client, queue_responses
):
    queue_responses(None)

    with pytest.raises(TwitterOperationError):
        await twitter_client.tweets.get_tweet(42)


@pytest.mark.asyncio
async def test_transport_errors_propagate(twitter_client, mock_api_client):
    mock_api_client.send.side_effect = NotFoundError("Resource not found.")

    with pytest.raises(NotFoundError):
        await twitter_client.tweets.get_tweet(42)


@pytest.mark.asyncio
async def test_get_tweets(twitter_client, queue_responses):
    send = queue_responses([{"id": 1, "text": "a"}, {"id": 3, "text": "c"}])

    tweets = await twitter_client.tweets.get_tweets([1, 2, 3])

    assert [tweet.id for tweet in tweets] == [1, 3]
    assert sent_requests(send)[0].params["id"] == "1,2,3"


@pytest.mark.asyncio
async def test_publish_tweet(twitter_client, queue_responses):
    send = queue_responses({"id": 100, "text": "hello world"})

    tweet = await twitter_client.tweets.publish_tweet("hello world")

    request = sent_requests(send)[0]
    assert request.method == "POST"
    assert request.params["status"] == "hello world"
    assert tweet.id == 100


@pytest.mark.asyncio
async def test_get_retweets(twitter_client, queue_responses):
    retweets = [
        {"id": 11, "text": "RT", "retweeted_status": {"id": 42, "text": "hi"}},
        {"id": 12, "text": "RT", "retweeted_status": {"id": 42, "text": "hi"}},
    ]
    send = queue_responses(retweets)

    result = await twitter_client.tweets.get_retweets(42)

    assert [tweet.id for tweet in result] == [11, 12]
    assert result[0].is_retweet
    assert result[0].retweeted_tweet.id == 42
    assert sent_requests(send)[0].params["count"] == 100


@pytest.mark.asyncio
async def test_publish_and_destroy_retweet(twitter_client, queue_responses):
    send = queue_responses({"id": 55, "retweeted_status": {"id": 42}}, {"id": 42})

    retweet = await twitter_client.tweets.publish_retweet(42)
    destroyed = await twitter_client.tweets.destroy_retweet(42)

    assert retweet.id == 55
    assert destroyed is True
    assert [r.url for r in sent_requests(send)] == [
        "statuses/retweet/42.json",
        "statuses/unretweet/42.json",
    ]


@pytest.mark.asyncio
async def test_destroy_retweet_failure_returns_false(twitter_client, queue_responses):
    queue_responses((403, {"errors": [{"code": 144}]}))
    assert await twitter_client.tweets.destroy_retweet(42) is False


# --- Destroy ---


@pytest.mark.asyncio
async def test_destroy_tweet_success_marks_domain_object(twitter_client, queue_responses):
    queue_responses({"id": 42, "text": "hi"}, {"id": 42, "text": "hi"})
    tweet = await twitter_client.tweets.get_tweet(42)
    assert not tweet.is_tweet_destroyed

    destroyed = await twitter_client.tweets.destroy_tweet(tweet)

    assert destroyed is True
    assert tweet.is_tweet_destroyed


@pytest.mark.asyncio
async def test_destroy_tweet_failure_leaves_flag_unchanged(
    twitter_client, queue_responses
):
    queue_responses((403, {"errors": [{"code": 183, "message": "Forbidden"}]}))
    tweet = Tweet(TweetDTO(id=42, text="hi"), client=twitter_client)

    destroyed = await twitter_client.tweets.destroy_tweet(tweet)

    assert destroyed is False
    assert not tweet.is_tweet_destroyed


@pytest.mark.asyncio
async def test_destroy_tweet_marks_dto(twitter_client, queue_responses):
    queue_responses({"id": 42})
    dto = TweetDTO(id=42)

    assert await twitter_client.tweets.destroy_tweet(dto) is True
    assert dto.is_tweet_destroyed
    assert "is_tweet_destroyed" not in dto.model_dump()


@pytest.mark.asyncio
async def test_destroy_tweet_by_id_or_parameters(twitter_client, queue_responses):
    send = queue_responses({"id": 42}, {"id": 43})

    assert await twitter_client.tweets.destroy_tweet(42) is True
    assert await twitter_client.tweets.destroy_tweet(DestroyTweetParameters(43)) is True
    assert [r.url for r in sent_requests(send)] == [
        "statuses/destroy/42.json",
        "statuses/destroy/43.json",
    ]


@pytest.mark.asyncio
async def test_tweet_destroy_shortcut(twitter_client, queue_responses):
    queue_responses({"id": 42})
    tweet = Tweet(TweetDTO(id=42), client=twitter_client)

    assert await tweet.destroy() is True
    assert tweet.is_tweet_destroyed


# --- Validation happens before the transport ---


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation",
    [
        "get_tweet",
        "destroy_tweet",
        "get_retweets",
        "publish_retweet",
        "destroy_retweet",
    ],
)
async def test_missing_tweet_never_reaches_transport(
    twitter_client, mock_api_client, operation
):
    with pytest.raises(TwitterArgumentError):
        await getattr(twitter_client.tweets, operation)(None)
    mock_api_client.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_arguments_never_reach_transport(twitter_client, mock_api_client):
    with pytest.raises(TwitterArgumentError):
        await twitter_client.tweets.get_tweets([])
    with pytest.raises(TwitterArgumentError):
        await twitter_client.tweets.publish_tweet("")
    with pytest.raises(TwitterArgumentError):
        await twitter_client.users.get_user(None)
    with pytest.raises(TwitterArgumentError):
        await twitter_client.users.get_users([])
    with pytest.raises(TwitterArgumentError):
        twitter_client.tweets.get_retweeter_ids_iterator(None)
    with pytest.raises(TwitterArgumentError):
        twitter_client.tweets.get_favorite_tweets_iterator(None)
    with pytest.raises(TwitterArgumentError):
        twitter_client.users.get_follower_ids_iterator(None)
    with pytest.raises(TwitterArgumentError):
        twitter_client.users.get_friend_ids_iterator(None)

    mock_api_client.send.assert_not_awaited()


def test_favorites_page_size_above_ceiling_fails_before_execution(
    twitter_client, mock_api_client
):
    ceiling = twitter_client.settings.limits.TWEETS_GET_FAVORITE_TWEETS_MAX_SIZE
    parameters = GetFavoriteTweetsParameters(7, page_size=ceiling + 5)

    with pytest.raises(TwitterArgumentLimitError) as exc_info:
        twitter_client.tweets.get_favorite_tweets_iterator(parameters)

    assert exc_info.value.value == ceiling + 5
    assert exc_info.value.parameter_name == "parameters.page_size"
    mock_api_client.send.assert_not_awaited()


# --- Cursor family ---


@pytest.mark.asyncio
async def test_retweeter_ids_iterator_follows_cursors(twitter_client, queue_responses):
    send = queue_responses(
        {"ids": [1, 2], "next_cursor": 1500, "next_cursor_str": "1500"},
        {"ids": [3], "next_cursor": 0, "next_cursor_str": "0"},
    )

    iterator = twitter_client.tweets.get_retweeter_ids_iterator(
        GetRetweeterIdsParameters(42, page_size=2)
    )
    assert iterator.has_more

    first = await iterator.move_next()
    assert first.content == [1, 2]
    assert first.next_cursor == "1500"
    assert iterator.has_more

    second = await iterator.move_next()
    assert second.content == [3]
    assert second.is_last_page
    assert not iterator.has_more

    empty = await iterator.move_next()
    assert empty.is_empty
    assert send.await_count == 2

    requests = sent_requests(send)
    assert "cursor" not in requests[0].params
    assert requests[1].params["cursor"] == "1500"
    assert requests[1].params["count"] == 2


@pytest.mark.asyncio
async def test_retweeter_ids_iterator_resumes_from_cursor(twitter_client, queue_responses):
    send = queue_responses({"ids": [9], "next_cursor_str": "0"})

    ids = await twitter_client.tweets.get_retweeter_ids_iterator(
        GetRetweeterIdsParameters(42, cursor="777")
    ).collect()

    assert ids == [[9]]
    assert sent_requests(send)[0].params["cursor"] == "777"


# --- Max-id family ---


@pytest.mark.asyncio
async def test_favorite_tweets_iterator_walks_max_id(twitter_client, queue_responses):
    send = queue_responses(
        [{"id": 30, "text": "c"}, {"id": 20, "text": "b"}],
        [{"id": 10, "text": "a"}],
        [],
    )

    iterator = twitter_client.tweets.get_favorite_tweets_iterator("jack")
    pages = [page.content async for page in iterator]

    assert [[tweet.id for tweet in page] for page in pages] == [[30, 20], [10], []]
    assert all(isinstance(tweet, Tweet) for page in pages for tweet in page)
    assert not iterator.has_more

    requests = sent_requests(send)
    assert [r.params.get("max_id") for r in requests] == [None, 19, 9]
    assert all(r.params["screen_name"] == "jack" for r in requests)
    assert requests[0].params["count"] == 200


@pytest.mark.asyncio
async def test_favorite_tweets_iterator_starts_at_max_id(twitter_client, queue_responses):
    send = queue_responses([])

    iterator = twitter_client.tweets.get_favorite_tweets_iterator(
        GetFavoriteTweetsParameters(7, max_id=500, page_size=10)
    )
    page = await iterator.move_next()

    assert page.content == []
    assert page.is_last_page
    assert sent_requests(send)[0].params["max_id"] == 500


# --- Users ---


@pytest.mark.asyncio
async def test_get_user(twitter_client, queue_responses):
    send = queue_responses({"id": 7, "screen_name": "jack", "followers_count": 10})

    user = await twitter_client.users.get_user("@jack")

    assert isinstance(user, User)
    assert user.id == 7
    assert user.followers_count == 10
    assert sent_requests(send)[0].params == {"screen_name": "jack"}


@pytest.mark.asyncio
async def test_get_users(twitter_client, queue_responses):
    queue_responses([{"id": 1, "screen_name": "a"}, {"id": 2, "screen_name": "b"}])

    users = await twitter_client.users.get_users([1, 2])

    assert [user.screen_name for user in users] == ["a", "b"]


@pytest.mark.asyncio
async def test_follower_ids_iterator(twitter_client, queue_responses):
    send = queue_responses(
        {"ids": [1, 2, 3], "next_cursor_str": "abc"},
        {"ids": [4], "next_cursor_str": "0"},
    )

    ids = await twitter_client.users.get_follower_ids_iterator(7).collect()

    assert ids == [[1, 2, 3], [4]]
    requests = sent_requests(send)
    assert [r.url for r in requests] == ["followers/ids.json", "followers/ids.json"]
    assert requests[0].params["count"] == 5000


@pytest.mark.asyncio
async def test_friend_ids_iterator_from_user(twitter_client, queue_responses):
    send = queue_responses({"id": 7, "screen_name": "jack"}, {"ids": [5], "next_cursor": 0})

    user = await twitter_client.users.get_user(7)
    ids = await user.get_friend_ids_iterator().collect()

    assert ids == [[5]]
    assert sent_requests(send)[1].params["user_id"] == 7


def test_friend_ids_page_size_limit(twitter_client, mock_api_client):
    with pytest.raises(TwitterArgumentLimitError) as exc_info:
        twitter_client.users.get_friend_ids_iterator(
            GetFriendIdsParameters(7, page_size=5001)
        )
    assert exc_info.value.limit_name == "USERS_GET_FRIEND_IDS_PAGE_MAX_SIZE"
    mock_api_client.send.assert_not_awaited()
