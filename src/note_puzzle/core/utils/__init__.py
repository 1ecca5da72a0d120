"""Serialization helpers for core models."""

from .serialization import (
    serialize_document,
    deserialize_document,
    serialize_session,
    deserialize_session,
    serialize_game_state,
    deserialize_game_state,
    dump_game_state,
    load_game_state,
    GameState,
    StateError,
)

__all__ = [
    "serialize_document",
    "deserialize_document",
    "serialize_session",
    "deserialize_session",
    "serialize_game_state",
    "deserialize_game_state",
    "dump_game_state",
    "load_game_state",
    "GameState",
    "StateError",
]
