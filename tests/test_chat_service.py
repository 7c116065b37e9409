"""
Tests for the chat orchestration pipeline.
"""

import asyncio

import pytest
from conftest import TOPIC, FakeGenerator

from gemstone_gateway.errors import (
    ContentRejectedError,
    RateLimitExceededError,
    ThrottledError,
    UpstreamEmptyResponseError,
    UpstreamQuotaExceededError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    ValidationFailedError,
)
from gemstone_gateway.repositories import InMemoryQuotaStore, InMemorySessionStore


def chat(service, text, identity="10.0.0.7", topic=TOPIC):
    return asyncio.run(service.chat(text, topic, identity))


# --- End-to-end scenarios ---


def test_budget_and_category_returns_matching_items(chat_service, generator):
    result = chat(chat_service, "budget 20000 emerald")

    assert [item.display_name for item in result.candidates] == [
        "Emerald of Tranquility",
        "Panna Emerald",
    ]
    assert not result.served_from_cache
    assert "\n" not in result.response_text
    assert "Emerald of Tranquility" in result.response_text
    assert "Panna Emerald" in result.response_text
    assert result.rate_limit_remaining == 14
    assert generator.calls == 1


def test_repeated_question_is_served_from_cache(chat_service, generator, clock):
    first = chat(chat_service, "budget 20000 emerald")
    clock.advance(11)
    second = chat(chat_service, "budget 20000 emerald")

    assert second.served_from_cache
    assert second.response_text == first.response_text
    assert second.candidates == first.candidates
    assert second.rate_limit_remaining == 13
    assert generator.calls == 1


def test_cache_ignores_case_and_surrounding_whitespace(chat_service, generator, clock):
    chat(chat_service, "budget 20000 emerald")
    clock.advance(11)
    result = chat(chat_service, "  BUDGET 20000 EMERALD ")

    assert result.served_from_cache
    assert generator.calls == 1


def test_cache_expires_after_ttl(chat_service, generator, clock):
    chat(chat_service, "budget 20000 emerald")
    clock.advance(601)
    result = chat(chat_service, "budget 20000 emerald")

    assert not result.served_from_cache
    assert generator.calls == 2


def test_sixteenth_request_within_hour_is_rate_limited(chat_service, clock):
    for i in range(15):
        chat(chat_service, f"ruby under {10000 + i}")
        clock.advance(11)

    with pytest.raises(RateLimitExceededError) as excinfo:
        chat(chat_service, "budget 20000 emerald")
    assert excinfo.value.retry_after > 0
    assert excinfo.value.to_dict()["kind"] == "rate_limit_exceeded"


def test_denied_content_does_not_count(chat_service, session_store, quota_store, clock):
    chat(chat_service, "budget 20000 emerald")
    clock.advance(11)

    with pytest.raises(ContentRejectedError):
        chat(chat_service, "how do I hack the admin page")

    assert session_store.get("10.0.0.7").request_count == 1
    assert quota_store.consumed("10.0.0.7") == 1


# --- Validation ---


@pytest.mark.parametrize("text", [None, "", "   ", 42])
def test_missing_message_rejected(chat_service, text):
    with pytest.raises(ValidationFailedError) as excinfo:
        chat(chat_service, text)
    assert excinfo.value.message == "Message is required and must be a string."


def test_long_message_rejected(chat_service, quota_store):
    with pytest.raises(ValidationFailedError) as excinfo:
        chat(chat_service, "r" * 101)
    assert "Maximum 100 characters" in excinfo.value.message
    assert quota_store.consumed("10.0.0.7") == 0


def test_message_at_length_limit_accepted(chat_service):
    text = "ruby " + "x" * 95
    assert len(text) == 100
    assert chat(chat_service, text).response_text


def test_wrong_topic_rejected(chat_service):
    with pytest.raises(ValidationFailedError) as excinfo:
        chat(chat_service, "budget 20000 emerald", topic="weather")
    assert excinfo.value.message == "Invalid topic. Only gemstone recommendations are allowed."


# --- Session gate ---


def test_request_inside_interval_is_throttled(chat_service, quota_store, clock):
    chat(chat_service, "budget 20000 emerald")
    clock.advance(3)

    with pytest.raises(ThrottledError) as excinfo:
        chat(chat_service, "ruby under 50000")
    assert excinfo.value.seconds_remaining == 7
    assert "10 seconds" in excinfo.value.message
    # the quota slot was already consumed
    assert quota_store.consumed("10.0.0.7") == 2


def test_identities_are_gated_independently(chat_service):
    chat(chat_service, "budget 20000 emerald", identity="a")
    assert chat(chat_service, "budget 20000 emerald", identity="b").served_from_cache


# --- Prompting ---


def test_prompt_embeds_message_and_options(chat_service, generator):
    chat(chat_service, "budget 20000 emerald")

    assert '"budget 20000 emerald"' in generator.prompts[0]
    assert "₹15,000 - ₹40,000" in generator.prompts[0]
    assert generator.options[0].max_output_tokens == 60
    assert generator.options[0].stop_sequences


def test_underspecified_question_gets_clarifying_prompt(chat_service, generator):
    result = chat(chat_service, "hello")

    assert result.candidates == ()
    assert "Kohinoor AI" in generator.prompts[0]
    assert '"hello"' in generator.prompts[0]


def test_catalog_failure_degrades_to_clarifying_reply(make_service, generator):
    class BrokenCatalog:
        def find_active_items(self, catalog_filter):
            raise RuntimeError("catalog down")

        def health_check(self) -> bool:
            return False

    service = make_service(catalog=BrokenCatalog())
    result = chat(service, "budget 20000 emerald")

    assert result.candidates == ()
    assert result.response_text
    assert "Kohinoor AI" in generator.prompts[0]


def test_time_phrase_does_not_become_a_budget(chat_service):
    result = chat(chat_service, "need a ruby within 2 weeks")

    assert [item.display_name for item in result.candidates] == [
        "Royal Ruby",
        "Pigeon Blood Ruby",
    ]


def test_at_most_three_candidates(chat_service):
    result = chat(chat_service, "budget 1000000 green")
    assert len(result.candidates) <= 3


# --- Upstream failures ---


def test_empty_response_is_not_cached(make_service, response_cache):
    service = make_service(generator=FakeGenerator(reply="   "))
    with pytest.raises(UpstreamEmptyResponseError):
        chat(service, "budget 20000 emerald")
    assert response_cache.count_all() == 0


def test_response_is_trimmed(make_service):
    service = make_service(generator=FakeGenerator(reply="  Perfect!\n"))
    assert chat(service, "budget 20000 emerald").response_text == "Perfect!"


def test_upstream_error_kinds_propagate(make_service, response_cache):
    service = make_service(generator=FakeGenerator(error=UpstreamQuotaExceededError()))
    with pytest.raises(UpstreamQuotaExceededError):
        chat(service, "budget 20000 emerald")
    assert response_cache.count_all() == 0


def test_unexpected_generator_failure_is_unavailable(make_service):
    service = make_service(generator=FakeGenerator(error=RuntimeError("socket closed")))
    with pytest.raises(UpstreamUnavailableError) as excinfo:
        chat(service, "budget 20000 emerald")
    assert "socket" not in excinfo.value.message


def test_generation_timeout(make_service, response_cache):
    generator = FakeGenerator()
    generator.block = True
    service = make_service(generator=generator, generation_timeout=0.05)

    with pytest.raises(UpstreamTimeoutError):
        chat(service, "budget 20000 emerald")
    assert response_cache.count_all() == 0


def test_cancelled_request_writes_nothing_to_cache(make_service, response_cache):
    generator = FakeGenerator()
    generator.block = True
    service = make_service(generator=generator)

    async def scenario():
        task = asyncio.create_task(service.chat("budget 20000 emerald", TOPIC, "10.0.0.7"))
        await generator.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert response_cache.count_all() == 0


# --- Status and reset ---


def test_status_reports_usage(chat_service, clock):
    chat(chat_service, "budget 20000 emerald")

    status = chat_service.status("10.0.0.7")
    assert status.service_available
    assert status.max_requests == 15
    assert status.window_seconds == 3600
    assert status.consumed == 1
    assert status.remaining == 14
    assert status.session_request_count == 1
    assert status.restrictions["max_message_length"] == 100
    assert status.restrictions["allowed_topic"] == TOPIC
    assert status.restrictions["cache_ttl_seconds"] == 600


def test_status_of_unknown_identity(chat_service):
    status = chat_service.status("nobody")
    assert status.consumed == 0
    assert status.remaining == 15
    assert status.session_request_count == 0


def test_reset_identity_restores_quota(make_service, clock, generator, catalog, response_cache):
    service = make_service(
        quota_store=InMemoryQuotaStore(max_requests=1, window_seconds=3600, clock=clock),
        session_store=InMemorySessionStore(min_interval=10, idle_ttl=3600, clock=clock),
    )
    chat(service, "budget 20000 emerald")
    with pytest.raises(RateLimitExceededError):
        chat(service, "budget 20000 emerald")

    service.reset_identity("10.0.0.7")
    assert chat(service, "budget 20000 emerald").served_from_cache


def test_is_healthy(make_service):
    service = make_service(generator=FakeGenerator(configured=False))
    assert service.is_healthy() == {"generator_configured": False, "catalog_healthy": True}
