"""
Tests for prompt construction and price formatting.
"""

from gemstone_gateway.entities import CandidateItem, PriceRange
from gemstone_gateway.services import build_prompt, extract_parameters, format_price
from gemstone_gateway.services.prompts import (
    ASSISTANT_NAME,
    OFF_TOPIC_REPLY,
    format_candidates,
    is_on_topic,
    missing_parameters,
)

RUBY = CandidateItem(
    id="royal-ruby",
    display_name="Royal Ruby",
    category="Ruby",
    price_range=PriceRange(min=50000, max=80000),
    slug="royal-ruby",
)
PEARL = CandidateItem(id="basra-pearl", display_name="Basra Pearl", category="Pearl")


def test_format_price_range():
    assert format_price(PriceRange(min=50000, max=80000)) == "₹50,000 - ₹80,000"


def test_format_price_minimum_only():
    assert format_price(PriceRange(min=25000)) == "₹25,000+"


def test_format_price_on_request():
    assert format_price(None) == "Price on request"
    assert format_price(PriceRange(max=1000)) == "Price on request"


def test_format_price_other_currency():
    assert format_price(PriceRange(min=99.5, max=120), "$") == "$99.50 - $120"


def test_format_candidates():
    assert format_candidates([RUBY, PEARL]) == (
        "Royal Ruby (Ruby) - ₹50,000 - ₹80,000, Basra Pearl (Pearl) - Price on request"
    )


def test_candidates_prompt_embeds_text_and_items():
    text = "ruby under 90000"
    prompt = build_prompt(text, [RUBY])

    assert f'"{text}"' in prompt
    assert "Royal Ruby (Ruby) - ₹50,000 - ₹80,000" in prompt
    assert "Perfect! I found these gems for you:" in prompt
    assert "ONE LINE ONLY" in prompt
    assert "40 WORDS" in prompt


def test_clarifying_prompt_asks_for_missing_details():
    text = "What's a good ruby under 50000 for my wedding?"
    prompt = build_prompt(text, [], extract_parameters(text))

    assert ASSISTANT_NAME in prompt
    assert f'USER: "{text}"' in prompt
    assert "your name" in prompt
    assert "your preferred color" in prompt
    assert OFF_TOPIC_REPLY not in prompt


def test_clarifying_prompt_for_off_topic_message():
    prompt = build_prompt("what is the weather today", [])
    assert OFF_TOPIC_REPLY in prompt
    assert '"what is the weather today"' in prompt


def test_build_prompt_extracts_when_params_not_given():
    text = "hello"
    assert build_prompt(text, []) == build_prompt(text, [], extract_parameters(text))


def test_missing_parameters_keeps_asking_order():
    params = extract_parameters("ruby under 50000 for my wedding")
    assert missing_parameters(params) == [
        "your name",
        "what it is for (ring, necklace, earrings or investment)",
        "your preferred color",
    ]


def test_is_on_topic():
    assert is_on_topic("tell me about gemstones", extract_parameters("tell me about gemstones"))
    assert is_on_topic("budget 100", extract_parameters("budget 100"))
    assert not is_on_topic("hello", extract_parameters("hello"))
