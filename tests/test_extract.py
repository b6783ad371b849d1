import pytest

from review_scraper.errors import ConfigurationError, ReviewScraperError
from review_scraper.extract import extract_product_id, find_product_id


PRODUCT_URL = (
    "https://www.digikala.com/product/dkp-8366616/"
    "%DA%AF%D9%88%D8%B4%DB%8C-%D9%85%D9%88%D8%A8%D8%A7%DB%8C%D9%84-iphone-13/"
)


def test_extracts_id_from_product_url():
    assert extract_product_id(PRODUCT_URL) == "8366616"


def test_accepts_bare_id():
    assert extract_product_id(" 123 ") == "123"


@pytest.mark.parametrize("reference", [None, "", "https://www.digikala.com/search/", "dkp-", "abc123"])
def test_no_id(reference):
    assert find_product_id(reference) is None
    with pytest.raises(ConfigurationError):
        extract_product_id(reference)


def test_configuration_error_is_scraper_error():
    assert issubclass(ConfigurationError, ReviewScraperError)
