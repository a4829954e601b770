from pathlib import Path

import pytest

from node_to_md.settings import Settings


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.repo.resolve() == Path.cwd().resolve()
    assert settings.no_styles is False
    assert settings.no_types is False
    assert not settings.exclude
    assert settings.include_ignored is False
    assert not settings.log_file
