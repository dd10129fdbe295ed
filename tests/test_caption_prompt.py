from __future__ import annotations

from caption_genius.modules.customization.models import AIConfiguration
from caption_genius.modules.generation.prompts import (
    CLOSING_INSTRUCTION,
    SYSTEM_INSTRUCTION,
    build_caption_prompt,
    build_messages,
)


def test_prompt_without_configuration_has_lead_and_closing_only():
    prompt = build_caption_prompt(
        niche="Indie Coffee Shop", text="New seasonal latte launch", config=None
    )
    assert prompt == (
        "Generate a creative and engaging social media caption for a Indie Coffee Shop business.\n"
        "Context: New seasonal latte launch\n"
        f"{CLOSING_INSTRUCTION}"
    )


def test_prompt_includes_configured_clauses_in_order():
    config = AIConfiguration(
        purpose="Drive weekday foot traffic",
        tone="Warm",
        preferences="Short sentences, two emojis max",
        additional_traits="Mention the barista by name",
        niche_vocabulary=["pour-over", " ", "single origin"],
        sample_posts=["Monday needs a cortado."],
    )
    lines = build_caption_prompt(
        niche="Indie Coffee Shop", text="New seasonal latte launch", config=config
    ).split("\n")

    assert lines[2:] == [
        "Purpose: Drive weekday foot traffic.",
        "Tone: Warm.",
        "Style and preferences: Short sentences, two emojis max.",
        "Additional traits: Mention the barista by name.",
        "Use these niche-specific terms where they fit: pour-over, single origin.",
        'Match the style of these example posts: "Monday needs a cortado."',
        CLOSING_INSTRUCTION,
    ]


def test_prompt_skips_unset_settings():
    config = AIConfiguration(purpose="", tone="Playful", preferences="  ", additional_traits=None)
    prompt = build_caption_prompt(niche="Yoga Studio", text="Sunrise flow on the beach", config=config)
    assert "Tone: Playful." in prompt
    assert "Purpose:" not in prompt
    assert "Style and preferences:" not in prompt
    assert "Additional traits:" not in prompt


def test_messages_pair_system_and_user_roles():
    messages = build_messages("hello")
    assert messages == [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": "hello"},
    ]
