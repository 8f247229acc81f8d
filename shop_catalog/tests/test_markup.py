from shop_catalog.models import ExtractionStrategy, PageData
from shop_catalog.strategies import MarkupStrategy
from shop_catalog.strategies.base import parse_html
from shop_catalog.strategies.markup import SelectorRule, extract_images, extract_price, first_match

from conftest import product_page

URL = "https://shop.example.com/products/canvas-tote"


def extract(body, url=URL):
    return MarkupStrategy().extract(PageData(url=url, html=product_page(body=body)))


def test_full_theme_page():
    product = extract("""
        <h1>Shop name</h1>
        <h1 class="product-single__title"> Canvas Tote </h1>
        <div class="product-single__description"><p>Sturdy.</p><style>.x{}</style></div>
        <span class="product-single__price">$1,299.00</span>
        <img src="//cdn.shop.com/s/files/products/tote_300x300.jpg?v=1">
        <img src="//cdn.shop.com/s/files/logo.png">
    """)

    assert product.title == "Canvas Tote"
    assert product.description == "<p>Sturdy.</p>"
    assert product.price.to_json() == 1299.0
    assert product.images == ["https://cdn.shop.com/s/files/products/tote.jpg?v=1"]
    assert product.id == "canvas-tote"
    assert product.handle == "canvas-tote"
    assert product.variants is None
    assert product.source is ExtractionStrategy.MARKUP


def test_title_falls_back_to_first_h1():
    assert extract("<h1>Plain Title</h1><h1>Other</h1>").title == "Plain Title"


def test_empty_specific_selector_falls_through():
    product = extract('<div class="product-single__title">  </div><h1>Generic</h1>')
    assert product.title == "Generic"


def test_nothing_found_gives_empty_fields():
    product = extract("<p>Nothing here</p>")
    assert product.title == ""
    assert product.description == ""
    assert product.price.is_absent
    assert product.images == []


def test_european_price_label():
    soup = parse_html('<div class="product-price">Sale: €49,90</div>')
    assert extract_price(soup) == 49.90


def test_price_selector_priority():
    soup = parse_html("""
        <span class="product-price">$10.00</span>
        <span class="price-item--sale">$8.00</span>
        <div class="price__regular"><span class="price-item--regular">$12.00</span></div>
    """)
    assert extract_price(soup) == 12.0


def test_price_label_without_number_tries_next_selector():
    soup = parse_html("""
        <span class="product__price">Sold out</span>
        <span class="product-price">$25</span>
    """)
    assert extract_price(soup) == 25.0


def test_no_price_anywhere():
    assert extract_price(parse_html("<p>$5 shipping</p>")) is None


def test_data_src_preferred_and_duplicates_removed():
    soup = parse_html("""
        <img src="data:image/gif;base64,R0lGOD" data-src="//cdn.x/products/a_100x100.jpg">
        <img src="//cdn.x/products/a.jpg">
        <img data-src="https://cdn.x/products/b_640x480.png">
        <img src="">
    """)
    assert extract_images(soup, URL) == [
        "https://cdn.x/products/a.jpg",
        "https://cdn.x/products/b.png",
    ]


def test_relative_product_image_is_resolved():
    soup = parse_html('<img src="/cdn/shop/products/c.jpg">')
    assert extract_images(soup, URL) == ["https://shop.example.com/cdn/shop/products/c.jpg"]


def test_first_match_reads_html_or_text():
    soup = parse_html('<div class="d"><b>Bold</b> text</div>')
    assert first_match(soup, [SelectorRule('.missing'), SelectorRule('.d')]) == "Bold text"
    assert first_match(soup, [SelectorRule('.d', read='html')]) == "<b>Bold</b> text"


def test_lazy_placeholder_outside_products_falls_back_to_src():
    soup = parse_html("""
        <img data-src="//cdn.x/assets/placeholder.gif" src="//cdn.x/products/d_200x200.jpg">
    """)
    assert extract_images(soup, URL) == ["https://cdn.x/products/d.jpg"]


def test_leading_decimal_price_label():
    assert extract_price(parse_html('<span class="product-price">$.99</span>')) == 0.99
