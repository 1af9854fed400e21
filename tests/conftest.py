"""Pytest configuration and shared fixtures for the markast test suite.

This module provides shared fixtures and test configuration that are used
across the entire test suite.
"""

import pytest

from markast.options import MarkdownParserOptions
from markast.parsers.markdown import MarkdownCompiler
from markast.parsing.dispatch import Dispatcher
from markast.parsing.rules import build_rules
from markast.parsing.state import CompileContext

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "security: Tests of URL sanitization and other security checks")


@pytest.fixture
def compiler() -> MarkdownCompiler:
    """Provide a compiler with default options."""
    return MarkdownCompiler()


@pytest.fixture
def context() -> CompileContext:
    """Provide a fresh compile context backed by the full default rule set."""
    options = MarkdownParserOptions()
    return CompileContext(Dispatcher(build_rules(options)), options)


@pytest.fixture
def sample_markdown() -> str:
    """Provide a sample document exercising most block constructs.

    Returns
    -------
    str
        Standard sample document used across multiple tests.

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.

## Section 2

Here is a list:

- Item 1
- Item 2
- Item 3

Numbered:

1. First item
2. Second item

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|:---------|---------:|
| Row 1    | Data 1   |
| Row 2    | Data 2   |

> Quoted text

---

See [the docs][docs] and the footnote[^1].

[docs]: https://example.com/docs "Docs"
[^1]: A footnote body.
"""
