"""Shared pytest fixtures for the CPU tests."""

import pytest

from chip8vm.cpu import CPU
from chip8vm.display import Display


@pytest.fixture
def screen():
    return Display()


@pytest.fixture
def cpu(screen):
    return CPU(screen, seed=1234)


@pytest.fixture
def strict_cpu(screen):
    return CPU(screen, strict=True, seed=1234)
