"""AllRecipes.com scraper.

No API and no authentication: pages are fetched as HTML. Recipe pages are
read from their embedded JSON-LD first, with a plain-HTML fallback for pages
that carry none. Search pages are read from their result cards.

Unlike the HEB client, network failures are not reclassified here; only a
non-2xx response raises ScrapeError.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup, Tag

from ..errors import ScrapeError, ValidationError
from ..models import Nutrition, Recipe, RecipeSearchResult
from ..validation import validate_non_empty

logger = logging.getLogger(__name__)

BASE_URL = "https://www.allrecipes.com"
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}
REQUEST_TIMEOUT = 15.0

MAX_SEARCH_LIMIT = 50
MIN_INSTRUCTION_LENGTH = 10

RECIPE_ID_RE = re.compile(r"/recipe/(\d+)/")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_INTEGER_RE = re.compile(r"\d[\d,]*")

CARD_SELECTOR = "a.mntl-card-list-card--extendable, a.mntl-document-card, a.card"
CARD_TITLE_SELECTOR = ".card__title-text, .card__title"
CARD_DESCRIPTION_SELECTOR = ".card__summary, .card__description"
HEADING_SELECTOR = "h1.article-heading, h1.headline, h1"
INGREDIENT_SELECTOR = 'li[class*="ingredient"], .ingredients-item, .mntl-structured-ingredients__list-item'
INSTRUCTION_SELECTOR = 'li[class*="instruction"], .instructions-section li, ol li'

# JSON-LD nutrition property → Nutrition field
NUTRITION_FIELDS = {
    "calories": "calories",
    "fatContent": "fat",
    "saturatedFatContent": "saturated_fat",
    "unsaturatedFatContent": "unsaturated_fat",
    "carbohydrateContent": "carbs",
    "sugarContent": "sugar",
    "fiberContent": "fiber",
    "proteinContent": "protein",
    "cholesterolContent": "cholesterol",
    "sodiumContent": "sodium",
}


async def fetch_html(
    url: str,
    params: Optional[dict] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """GET a page, following redirects. Non-2xx raises ScrapeError."""
    async with httpx.AsyncClient(
        timeout=REQUEST_TIMEOUT,
        follow_redirects=True,
        headers=REQUEST_HEADERS,
        transport=transport,
    ) as client:
        response = await client.get(url, params=params)

    if not response.is_success:
        logger.warning("AllRecipes returned HTTP %d for %s", response.status_code, response.url)
        raise ScrapeError(
            f"HTTP {response.status_code}: {response.reason_phrase} for URL: {response.url}",
            status_code=response.status_code,
        )
    return response.text


# ─── Structured data (tier 1) ────────────────────────────────────────────────


def _has_type(item: Any, type_name: str) -> bool:
    if not isinstance(item, dict):
        return False
    declared = item.get("@type")
    if isinstance(declared, list):
        return type_name in declared
    return declared == type_name


def extract_json_ld(html: str, type_name: str = "Recipe") -> Optional[dict]:
    """Return the first JSON-LD object of `type_name`, scanning blocks in document order.

    A top-level array is searched element by element. Blocks that fail to
    parse are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            data = json.loads(script.get_text())
        except ValueError:
            continue

        if isinstance(data, list):
            for item in data:
                if _has_type(item, type_name):
                    return item
        elif _has_type(data, type_name):
            return data
    return None


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_RE.search(str(value))
    return float(match.group()) if match else None


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _INTEGER_RE.search(str(value))
    return int(match.group().replace(",", "")) if match else None


def _parse_rating(value: Any) -> Optional[float]:
    rating = _parse_float(value)
    if rating is None or not 0.0 <= rating <= 5.0:
        return None
    return rating


def _author_name(author: Any) -> Optional[str]:
    if isinstance(author, list):
        author = author[0] if author else None
    if isinstance(author, dict):
        return _text(author.get("name"))
    return None


def _image_url(image: Any) -> Optional[str]:
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        return _text(image.get("url"))
    return _text(image)


def _servings(recipe_yield: Any) -> Optional[str]:
    if isinstance(recipe_yield, list):
        parts = [str(part) for part in recipe_yield if part is not None]
        return ", ".join(parts) or None
    return _text(recipe_yield)


def _instructions(entries: Any) -> list[str]:
    steps: list[str] = []
    if not isinstance(entries, list):
        return steps
    for entry in entries:
        if isinstance(entry, str):
            steps.append(entry)
        elif isinstance(entry, dict) and isinstance(entry.get("text"), str) and entry["text"]:
            steps.append(entry["text"])
    return steps


def _nutrition(raw: Any) -> Optional[Nutrition]:
    if not isinstance(raw, dict):
        return None
    values = {
        field: str(raw[key])
        for key, field in NUTRITION_FIELDS.items()
        if raw.get(key)
    }
    return Nutrition(**values) if values else None


def parse_recipe_from_json_ld(recipe_id: str, data: dict) -> Recipe:
    ingredients = data.get("recipeIngredient")
    nutrition = _nutrition(data.get("nutrition"))
    rating = data.get("aggregateRating")
    rating = rating if isinstance(rating, dict) else {}

    return Recipe(
        id=recipe_id,
        name=str(data.get("name") or ""),
        url=_text(data.get("url")) or f"{BASE_URL}/recipe/{recipe_id}",
        description=_text(data.get("description")),
        author=_author_name(data.get("author")),
        prep_time=_text(data.get("prepTime")),
        cook_time=_text(data.get("cookTime")),
        total_time=_text(data.get("totalTime")),
        servings=_servings(data.get("recipeYield")),
        calories=nutrition.calories if nutrition else None,
        rating=_parse_rating(rating.get("ratingValue")),
        review_count=_parse_int(rating.get("reviewCount")),
        image_url=_image_url(data.get("image")),
        ingredients=[str(i) for i in ingredients] if isinstance(ingredients, list) else [],
        instructions=_instructions(data.get("recipeInstructions")),
        nutrition=nutrition,
    )


# ─── HTML fallback (tier 2) ──────────────────────────────────────────────────


def _item_texts(soup: BeautifulSoup, selector: str) -> list[str]:
    """Stripped text of each innermost match; a match wrapping another match is skipped."""
    matches = soup.select(selector)
    matched = {id(el) for el in matches}
    return [
        el.get_text().strip()
        for el in matches
        if not any(id(inner) in matched for inner in el.find_all(True))
    ]


def parse_recipe_from_html(recipe_id: str, html: str) -> Recipe:
    """Minimal recipe from page markup: title, ingredients and steps only."""
    soup = BeautifulSoup(html, "html.parser")

    heading = soup.select_one(HEADING_SELECTOR)
    name = heading.get_text().strip() if heading else ""

    ingredients = [text for text in _item_texts(soup, INGREDIENT_SELECTOR) if text]
    # short fragments are stray list items, not steps
    instructions = [
        text for text in _item_texts(soup, INSTRUCTION_SELECTOR) if len(text) > MIN_INSTRUCTION_LENGTH
    ]

    return Recipe(
        id=recipe_id,
        name=name,
        url=f"{BASE_URL}/recipe/{recipe_id}",
        ingredients=ingredients,
        instructions=instructions,
    )


def resolve_recipe_reference(recipe_id_or_url: str) -> tuple[str, str]:
    """Split a recipe URL or bare id into (recipe_id, url_to_fetch)."""
    reference = validate_non_empty(recipe_id_or_url, "Recipe URL")

    if reference.startswith("http"):
        match = RECIPE_ID_RE.search(reference)
        return (match.group(1) if match else reference), reference

    # AllRecipes redirects /recipe/<id> to the canonical slugged URL
    return reference, f"{BASE_URL}/recipe/{reference}"


async def get_recipe(
    recipe_id_or_url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Recipe:
    recipe_id, url = resolve_recipe_reference(recipe_id_or_url)
    html = await fetch_html(url, transport=transport)

    data = extract_json_ld(html, "Recipe")
    if data is not None:
        return parse_recipe_from_json_ld(recipe_id, data)

    logger.info("No Recipe JSON-LD on %s, falling back to HTML parsing", url)
    return parse_recipe_from_html(recipe_id, html)


# ─── Search ──────────────────────────────────────────────────────────────────


def dedupe_title(text: str) -> str:
    """Collapse a title that the site renders twice back to back.

    Returns the first half when the second half repeats it (allowing a single
    whitespace separator); otherwise the text unchanged.
    """
    text = text.strip()
    length = len(text)
    half = length // 2
    if length >= 2 and length % 2 == 0 and text[:half] == text[half:]:
        return text[:half].strip()
    if length >= 3 and length % 2 == 1 and text[half].isspace() and text[:half] == text[half + 1:]:
        return text[:half].strip()
    return text


def _card_image(card: Tag) -> Optional[str]:
    img = card.find("img")
    if img is None:
        return None
    return img.get("data-src") or img.get("src") or None


def _card_rating(card: Tag) -> Optional[float]:
    marker = card.select_one('[class*="rating"]')
    if marker is None:
        return None
    return _parse_rating(marker.get("data-rating") or marker.get_text().strip())


def _card_review_count(card: Tag) -> Optional[int]:
    return _parse_int("".join(el.get_text() for el in card.select('[class*="review"]')))


def parse_search_results(html: str, limit: int) -> list[RecipeSearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[RecipeSearchResult] = []

    for card in soup.select(CARD_SELECTOR):
        if len(results) >= limit:
            break

        href = card.get("href")
        if not href:
            continue
        match = RECIPE_ID_RE.search(href)
        if not match:
            continue  # article or category page

        title = dedupe_title("".join(el.get_text() for el in card.select(CARD_TITLE_SELECTOR)))
        if not title:
            continue

        description = " ".join(el.get_text().strip() for el in card.select(CARD_DESCRIPTION_SELECTOR)).strip()

        results.append(RecipeSearchResult(
            id=match.group(1),
            title=title,
            url=href if href.startswith("http") else urljoin(BASE_URL, href),
            image_url=_card_image(card),
            rating=_card_rating(card),
            review_count=_card_review_count(card),
            description=description or None,
        ))

    return results


async def search_recipes(
    query: str,
    limit: int = 10,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[RecipeSearchResult]:
    """Search AllRecipes and return up to `limit` recipe cards."""
    term = validate_non_empty(query, "Search query")
    if not 1 <= limit <= MAX_SEARCH_LIMIT:
        raise ValidationError(f"Limit must be between 1 and {MAX_SEARCH_LIMIT}")

    html = await fetch_html(f"{BASE_URL}/search", params={"q": term}, transport=transport)
    results = parse_search_results(html, limit)
    logger.info("Recipe search %r returned %d result(s)", term, len(results))
    return results
