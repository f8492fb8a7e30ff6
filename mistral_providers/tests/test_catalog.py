"""Tests for the model catalog and configured model overrides."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from mistral_providers.mistral.catalog import (
    BUILTIN_MODELS,
    AvailableModel,
    default_fast_model,
    default_model,
    find_model,
    merge_models,
)


def test_builtin_catalog_contents():
    assert "codestral-latest" in BUILTIN_MODELS  # nosec B101
    assert BUILTIN_MODELS["codestral-latest"].max_tokens == 256000  # nosec B101
    assert BUILTIN_MODELS["pixtral-12b-latest"].supports_images  # nosec B101
    assert not BUILTIN_MODELS["codestral-latest"].supports_images  # nosec B101
    assert all(m.supports_tools for m in BUILTIN_MODELS.values())  # nosec B101


def test_defaults():
    assert default_model().id == "mistral-small-latest"  # nosec B101
    assert default_fast_model().id == "mistral-small-latest"  # nosec B101


def test_available_model_flags_default_to_false():
    model = AvailableModel(name="custom", max_tokens=4096).to_model()

    assert model.display_name == "custom"  # nosec B101
    assert not model.supports_tools and not model.supports_images  # nosec B101
    assert model.max_output_tokens is None  # nosec B101


def test_available_model_requires_max_tokens():
    with pytest.raises(ValidationError):
        AvailableModel.model_validate({"name": "custom"})


def test_merge_overrides_builtin_and_sorts():
    merged = merge_models(
        [
            {"name": "zz-model", "max_tokens": 10},
            AvailableModel(name="codestral-latest", max_tokens=5, max_output_tokens=2, supports_tools=True),
        ]
    )
    ids = [m.id for m in merged]

    assert ids == sorted(ids)  # nosec B101
    assert len(ids) == len(BUILTIN_MODELS) + 1  # nosec B101
    codestral = next(m for m in merged if m.id == "codestral-latest")
    assert codestral.max_tokens == 5 and codestral.max_output_tokens == 2  # nosec B101


def test_find_model():
    assert find_model("open-mistral-nemo").max_tokens == 131000  # nosec B101
    assert find_model("nope") is None  # nosec B101
    assert find_model("mine", [{"name": "mine", "max_tokens": 1}]).id == "mine"  # nosec B101
