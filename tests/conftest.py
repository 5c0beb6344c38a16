"""
Root pytest configuration for MCP Linear tests.

Linear is never contacted from the test suite: API traffic goes through
``tests.utils.graphql.FakeLinearAPI`` or ``MagicMock(spec=LinearFetcher)``.
"""

import pytest


@pytest.fixture
def anyio_backend():
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"
