import pytest

from schema_scout.data import infer_domain
from schema_scout.utils.json2md import config_to_markdown


@pytest.fixture
def config():
    return {
        "name": "sales",
        "directory": "/data/",
        "schemas": [{
            "name": "orders",
            "pattern": "orders.csv",
            "attributes": [
                {"name": "id", "type": "long", "array": False, "required": True},
                {"name": "customer", "type": "struct", "array": False, "required": False,
                 "attributes": [{"name": "email", "type": "string", "array": False, "required": False}]},
                {"name": "tags", "type": "string", "array": True, "required": False},
            ],
            "metadata": {"format": "DSV", "array": False, "withHeader": True, "separator": ";"},
        }],
    }


def test_config_to_markdown_basic(config):
    md = config_to_markdown(config)

    assert "# Domain `sales`" in md
    assert "Directory: `/data/`" in md
    assert "## Schema `orders`" in md
    assert "Pattern: `orders.csv`" in md
    assert "format=DSV, array=false, withHeader=true, separator=';'" in md

    lines = [l for l in md.splitlines() if l.startswith("|")]
    # header, separator row and four attribute rows
    assert len(lines) == 6
    assert "Attribute" in lines[0] and "Type" in lines[0] and "Required" in lines[0]
    assert any("customer.email" in l for l in lines)
    assert any("array<string>" in l for l in lines)


def test_config_to_markdown_without_attributes():
    md = config_to_markdown({"name": "d", "directory": "", "schemas": [{"name": "s", "pattern": "x", "attributes": []}]})
    assert "## Schema `s`" in md
    assert not [l for l in md.splitlines() if l.startswith("|")]


def test_markdown_of_inferred_domain(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text('{"id": 1, "tag": "a"}\n{"id": 2, "tag": "b"}\n', encoding="utf-8")
    md = config_to_markdown(infer_domain("web", "events", str(path)).to_dict())
    assert "format=JSON" in md
    assert "| id" in md and "| tag" in md
