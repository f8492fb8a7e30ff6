"""Mistral model catalog.

Built-in models plus user-declared ``available_models`` from configuration.
A configured entry whose name matches a built-in replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..config.defaults import MISTRAL_DEFAULT_FAST_MODEL, MISTRAL_DEFAULT_MODEL


@dataclass(frozen=True)
class MistralModel:
    id: str
    display_name: str
    max_tokens: int
    max_output_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    supports_tools: bool = True
    supports_images: bool = False


def _builtin(model_id: str, max_tokens: int, *, images: bool = False) -> MistralModel:
    return MistralModel(id=model_id, display_name=model_id, max_tokens=max_tokens, supports_images=images)


BUILTIN_MODELS: Dict[str, MistralModel] = {
    m.id: m
    for m in (
        _builtin("codestral-latest", 256000),
        _builtin("mistral-large-latest", 131000),
        _builtin("mistral-medium-latest", 128000, images=True),
        _builtin("mistral-small-latest", 32000, images=True),
        _builtin("magistral-medium-latest", 40000),
        _builtin("magistral-small-latest", 40000),
        _builtin("open-mistral-nemo", 131000),
        _builtin("open-codestral-mamba", 256000),
        _builtin("devstral-medium-latest", 128000),
        _builtin("devstral-small-latest", 262144),
        _builtin("pixtral-12b-latest", 128000, images=True),
        _builtin("pixtral-large-latest", 128000, images=True),
    )
}


def default_model() -> MistralModel:
    return BUILTIN_MODELS[MISTRAL_DEFAULT_MODEL]


def default_fast_model() -> MistralModel:
    return BUILTIN_MODELS[MISTRAL_DEFAULT_FAST_MODEL]


class AvailableModel(BaseModel):
    """A model declared in the ``available_models`` configuration list.

    Capability flags left unset are treated as unsupported.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    display_name: Optional[str] = None
    max_tokens: int
    max_output_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    supports_tools: Optional[bool] = None
    supports_images: Optional[bool] = None

    def to_model(self) -> MistralModel:
        return MistralModel(
            id=self.name,
            display_name=self.display_name or self.name,
            max_tokens=self.max_tokens,
            max_output_tokens=self.max_output_tokens,
            max_completion_tokens=self.max_completion_tokens,
            supports_tools=bool(self.supports_tools),
            supports_images=bool(self.supports_images),
        )


def merge_models(available: Iterable[AvailableModel | dict] = ()) -> List[MistralModel]:
    """Return built-ins overridden by configured models, sorted by id."""
    models = dict(BUILTIN_MODELS)
    for entry in available:
        parsed = entry if isinstance(entry, AvailableModel) else AvailableModel.model_validate(entry)
        models[parsed.name] = parsed.to_model()
    return [models[k] for k in sorted(models)]


def find_model(model_id: str, available: Iterable[AvailableModel | dict] = ()) -> Optional[MistralModel]:
    for model in merge_models(available):
        if model.id == model_id:
            return model
    return None


__all__ = [
    "AvailableModel",
    "BUILTIN_MODELS",
    "MistralModel",
    "default_fast_model",
    "default_model",
    "find_model",
    "merge_models",
]
