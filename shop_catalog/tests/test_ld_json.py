import json

from shop_catalog.models import ExtractionStrategy, PageData
from shop_catalog.strategies import LdJsonStrategy

from conftest import product_page

URL = "https://shop.example.com/products/wool-coat?variant=123"


def extract(html, url=URL):
    return LdJsonStrategy().extract(PageData(url=url, html=html))


def ld(data):
    # escape "</" so embedded markup can't close the surrounding <script>
    return json.dumps(data).replace("</", "<\\/")


def test_scheme_relative_image_becomes_https():
    html = product_page(ld_json=[ld({
        "@context": "https://schema.org",
        "@type": "Product",
        "name": "Wool Coat",
        "image": "//cdn.x/a.jpg",
        "offers": {"@type": "Offer", "price": "120.00"},
    })])

    product = extract(html)

    assert product.images == ["https://cdn.x/a.jpg"]
    assert product.title == "Wool Coat"
    assert product.price.to_json() == 120.0
    assert product.id == "wool-coat"
    assert product.handle == "wool-coat"
    assert product.url == URL
    assert product.variants is None
    assert product.source is ExtractionStrategy.LD_JSON


def test_no_product_block_is_not_found():
    html = product_page(ld_json=[ld({"@type": "Organization", "name": "Shop"})])
    assert extract(html) is None


def test_no_ld_json_at_all():
    assert extract(product_page(body="<h1>Coat</h1>")) is None


def test_malformed_block_is_ignored():
    html = product_page(ld_json=[
        '{"@type": "Product", "name": broken',
        ld({"@type": "Product", "name": "Valid"}),
    ])
    assert extract(html).title == "Valid"


def test_only_malformed_block_falls_through():
    html = product_page(ld_json=['{not json'])
    assert extract(html) is None


def test_last_product_block_wins_without_merge():
    html = product_page(ld_json=[
        ld({"@type": "Product", "name": "First", "description": "first desc",
            "offers": {"price": "1.00"}}),
        ld({"@type": "Product", "name": "Second"}),
    ])

    product = extract(html)

    assert product.title == "Second"
    assert product.description == ""
    assert product.price.is_absent


def test_graph_and_list_blocks():
    html = product_page(ld_json=[
        ld([{"@type": "BreadcrumbList"}, {"@type": ["Product", "Thing"], "name": "From list"}]),
        ld({"@graph": [{"@type": "WebPage"}, {"@type": "Product", "name": "From graph"}]}),
    ])
    assert extract(html).title == "From graph"


def test_low_price_used_when_no_price():
    html = product_page(ld_json=[ld({
        "@type": "Product",
        "name": "Coat",
        "offers": {"@type": "AggregateOffer", "lowPrice": "80", "highPrice": "140"},
    })])
    assert extract(html).price.to_json() == 80.0


def test_offer_list_uses_first_offer():
    html = product_page(ld_json=[ld({
        "@type": "Product",
        "name": "Coat",
        "offers": [{"price": "55.5"}, {"price": "70"}],
    })])
    assert extract(html).price.to_json() == 55.5


def test_markup_price_is_last_resort():
    html = product_page(
        body='<span class="product__price">$1,299.00</span>',
        ld_json=[ld({"@type": "Product", "name": "Coat"})],
    )
    assert extract(html).price.to_json() == 1299.0


def test_image_list_and_image_objects():
    html = product_page(ld_json=[ld({
        "@type": "Product",
        "name": "Coat",
        "image": [
            "https://cdn.x/1.jpg",
            {"@type": "ImageObject", "url": "//cdn.x/2.jpg"},
            "https://cdn.x/1.jpg",
        ],
    })])
    assert extract(html).images == ["https://cdn.x/1.jpg", "https://cdn.x/2.jpg"]


def test_description_is_sanitized():
    html = product_page(ld_json=[ld({
        "@type": "Product",
        "name": "Coat",
        "description": "  Warm.<script>track()</script> ",
    })])
    assert extract(html).description == "Warm."
