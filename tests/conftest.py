"""Shared network fixtures.

Node indices are drawn in the comments as ``[i]``; edge labels are
capacities.
"""

from __future__ import annotations

import pytest

from ekflow.graph.flow_network import FlowNetwork


@pytest.fixture
def classic6() -> FlowNetwork:
    # Six-node textbook network; max flow 0 -> 5 is 19 and the final
    # residual cut separates {0, 2} from the rest.
    return FlowNetwork.from_edges(
        6,
        [
            (0, 1, 10),
            (0, 2, 10),
            (1, 2, 2),
            (1, 3, 4),
            (1, 4, 8),
            (2, 4, 9),
            (3, 5, 10),
            (4, 3, 6),
            (4, 5, 10),
        ],
    )


@pytest.fixture
def line3() -> FlowNetwork:
    # [0] ──7──► [1] ──4──► [2]
    return FlowNetwork.from_edges(3, [(0, 1, 7), (1, 2, 4)])


@pytest.fixture
def diamond() -> FlowNetwork:
    #     ┌─3─►[1]─2─┐
    #  [0]           ▼
    #     └─2─►[2]─3─►[3]
    return FlowNetwork.from_edges(4, [(0, 1, 3), (0, 2, 2), (1, 3, 2), (2, 3, 3)])


@pytest.fixture
def reverse_trap() -> FlowNetwork:
    # Unit capacities. Routes 0-1-4-5-3 and 0-6-7-2-3 carry 2 units, but the
    # unique shortest path 0-1-2-3 is found first and takes 1->2. The second
    # augmentation must cancel it: 0-6-7-2-1-4-5-3.
    return FlowNetwork.from_edges(
        8,
        [
            (0, 1, 1),
            (1, 2, 1),
            (2, 3, 1),
            (1, 4, 1),
            (4, 5, 1),
            (5, 3, 1),
            (0, 6, 1),
            (6, 7, 1),
            (7, 2, 1),
        ],
    )


@pytest.fixture
def disconnected() -> FlowNetwork:
    # [0] ──5──► [1]     [2] ──5──► [3]
    return FlowNetwork.from_edges(4, [(0, 1, 5), (2, 3, 5)])
