"""Shared test fixtures."""

import pytest


@pytest.fixture
def project_tree(tmp_path):
    """Build proj/node_modules/{a,b}, proj/src/node_modules/x and proj/readme.md."""
    proj = tmp_path / "proj"
    for sub in ["node_modules/a", "node_modules/b", "src/node_modules/x"]:
        (proj / sub).mkdir(parents=True)
    (proj / "node_modules" / "a" / "index.js").write_text("module.exports = {}")
    (proj / "src" / "node_modules" / "x" / "package.json").write_text("{}")
    (proj / "readme.md").write_text("# proj")
    return proj
