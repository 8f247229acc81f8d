import logging

import pytest

from shop_catalog import cli
from shop_catalog.models import Price, Product
from shop_catalog.storage import load_products


class StubPipeline:
    runs = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs

    async def run(self, url):
        StubPipeline.runs.append(url)
        return [Product(id="a", handle="a", title="A", description="", price=Price.absent(),
                        images=[], url=f"{url}/products/a")]


@pytest.fixture(autouse=True)
def stub_pipeline(monkeypatch):
    StubPipeline.runs = []
    monkeypatch.setattr(cli, "CatalogPipeline", StubPipeline)


def test_writes_products_file(tmp_path):
    code = cli.main(["www.example.com/", "--output-root", str(tmp_path)])

    assert code == 0
    assert StubPipeline.runs == ["https://www.example.com"]
    saved = load_products(tmp_path / "example.com_products" / "products_data.json")
    assert [p["handle"] for p in saved] == ["a"]


def test_prompts_when_url_missing(tmp_path, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: "example.com")
    assert cli.main(["--output-root", str(tmp_path)]) == 0
    assert StubPipeline.runs == ["https://example.com"]


def test_missing_url_exits_1(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: "")
    assert cli.main([]) == 1
    assert StubPipeline.runs == []


def test_invalid_url_exits_1():
    assert cli.main(["not a url"]) == 1
    assert StubPipeline.runs == []


def test_debug_level_logs_configuration(tmp_path, caplog):
    with caplog.at_level(logging.DEBUG, logger="shop_catalog"):
        assert cli.main(["example.com", "--output-root", str(tmp_path), "--log-level", "DEBUG"]) == 0
    assert "Configuration:" in caplog.text
    assert "'page_size'" in caplog.text
