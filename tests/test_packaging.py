from pathlib import Path

import sortanimation

ROOT = Path(__file__).resolve().parent.parent


def test_metadata_readme_is_project_readme():
    pyproject = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    assert 'readme = "README.md"' in pyproject
    assert "sortanimation" in (ROOT / "README.md").read_text(encoding="utf-8")


def test_version_matches_metadata():
    pyproject = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    assert f'version = "{sortanimation.__version__}"' in pyproject
