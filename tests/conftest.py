# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shared fixtures for envvar tests."""

import io

import pytest

import envvar


@pytest.fixture(autouse=True)
def reset_default_set():
    """Give every test a fresh CONTINUE_ON_ERROR default set."""
    envvar.reset_for_testing()
    yield
    envvar.reset_for_testing()


@pytest.fixture
def output():
    """In-memory diagnostics stream."""
    return io.StringIO()


@pytest.fixture
def env_set(output):
    """A named CONTINUE_ON_ERROR set writing diagnostics to `output`."""
    return envvar.EnvVarSet("test", envvar.ErrorHandling.CONTINUE_ON_ERROR, output=output)
