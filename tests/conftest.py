#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettyseq.config import configure
from prettyseq.pretty import PrettyRenderer
from prettyseq.registry import RendererRegistry


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_options():
    """Restore default module options after each test."""
    yield
    configure(preset="default")


@pytest.fixture
def registry() -> RendererRegistry:
    """Fresh, open renderer registry."""
    return RendererRegistry()


@pytest.fixture
def renderer(registry) -> PrettyRenderer:
    """Renderer bound to the fresh registry and module options."""
    return PrettyRenderer(registry=registry)
