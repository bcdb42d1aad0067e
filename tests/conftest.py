from __future__ import annotations

import pytest

from pair_harness import PairHarness, deploy_pair, new_chain
from pairswap.integration.chain import Chain


@pytest.fixture
def chain() -> Chain:
    return new_chain()


@pytest.fixture
def harness(chain: Chain) -> PairHarness:
    return deploy_pair(chain)
