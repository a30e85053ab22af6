"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so local overrides are honored.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

os.environ.setdefault("LOCATOR_LOG_LEVEL", "debug")
os.environ.setdefault("LOCATOR_LOG_TO_FILE", "false")

from locator_engine.adapters.class_resolver import MappingClassResolver  # noqa: E402
from locator_engine.services import Container, runtime  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_default_container():
    """Every test starts and ends without a process-wide default container."""
    runtime.clear_default()
    yield
    runtime.clear_default()


@pytest.fixture
def class_resolver() -> MappingClassResolver:
    """An empty in-memory class table tests can register classes into."""
    return MappingClassResolver()


@pytest.fixture
def container(class_resolver: MappingClassResolver) -> Container:
    """A container whose fallback only knows classes registered by the test."""
    return Container(class_resolver)
