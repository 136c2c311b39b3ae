from pathlib import Path

import pytest

from tests.helpers import FEATURE_EVERYTHING, FEATURE_NO_KEYWORD


@pytest.fixture
def feature_files(tmp_path: Path) -> Path:
    (tmp_path / 'good.feature').write_text(FEATURE_EVERYTHING, encoding='utf-8')
    (tmp_path / 'features').mkdir()
    (tmp_path / 'features' / 'bad.feature').write_text(FEATURE_NO_KEYWORD, encoding='utf-8')

    return tmp_path
