# ludoteca/scraper/ludopedia.py
"""Best-effort extraction of a Ludopedia game page into a draft record.

The page layout is not under our control, so every field is looked up with an
ordered list of locators or patterns and the first hit wins. Only the name is
mandatory; everything else is left at its default when nothing matches.
"""

import re
from functools import partial
from typing import Dict, Optional, Sequence

from bs4 import BeautifulSoup

from ludoteca.config import settings
from ludoteca.errors import ExtractionError, InvalidGameUrl
from ludoteca.schemas.game import YES, DraftGameRecord
from ludoteca.utils.strategies import StrategyResult, first_success

MAX_NAME_LENGTH = 200

NAME_SELECTORS = (
    'h3 a[href*="/jogo/"]',
    "h1",
    "h2",
    ".jogo-title",
    '[itemprop="name"]',
    "title",
)
TITLE_SELECTOR = "title"
# "Catan | Ludopedia" / "Catan - Jogo de Tabuleiro" -> "Catan"
_TITLE_SUFFIX_RE = re.compile(r"\s*[-|].*$")

_COVER_RE = re.compile(r"https://storage\.googleapis\.com/ludopedia-capas/\d+_[mt]\.jpg")
_THUMBNAIL_SUFFIX_RE = re.compile(r"_t\.jpg$")
IMAGE_SELECTOR = 'img[src*="ludopedia"], .img-jogo img, .capa-jogo img'

PLAYERS_PATTERNS = (
    re.compile(r"(\d+)\s*(?:a|-)\s*(\d+)\s*jogador", re.I),
    re.compile(r"(\d+)\s*jogador", re.I),
)
AGE_PATTERNS = (
    re.compile(r"(?:idade|anos?)[:\s]*(\d+)", re.I),
    re.compile(r"(\d+)\s*(?:\+|anos)", re.I),
)
TIME_PATTERNS = (re.compile(r"(\d+)(?:\s*-\s*\d+)?\s*min", re.I),)
RATING_PATTERNS = (re.compile(r"nota\s*(?:m[eé]dia)?[:\s]*(\d+[.,]\d+)", re.I),)
RANK_PATTERNS = (re.compile(r"rank\s*(?:bg)?[:\s]*(\d+)", re.I),)
PARTY_RE = re.compile(r"jogo\s*festivo|party", re.I)
COOP_RE = re.compile(r"cooperativo|coop", re.I)


def validate_game_url(url: str) -> str:
    url = (url or "").strip()
    if settings.LUDOPEDIA_URL_MARKER not in url:
        raise InvalidGameUrl(
            "URL inválida. Use um link da Ludopedia (ex: ludopedia.com.br/jogo/nome-do-jogo)"
        )
    return url


# ----------------------------
# Name
# ----------------------------

def _name_from(soup: BeautifulSoup, selector: str) -> StrategyResult[str]:
    el = soup.select_one(selector)
    if el is None:
        return StrategyResult.skip(f"no {selector}")

    name = el.get_text().strip()
    if selector == TITLE_SELECTOR:
        name = _TITLE_SUFFIX_RE.sub("", name).strip()
    if not name or len(name) >= MAX_NAME_LENGTH:
        return StrategyResult.skip(f"unusable {selector}")
    return StrategyResult.success(name, strategy=selector)


def extract_name(soup: BeautifulSoup) -> Optional[str]:
    return first_success(partial(_name_from, soup, selector) for selector in NAME_SELECTORS).value


# ----------------------------
# Image
# ----------------------------

def _image_from_markup(html: str) -> StrategyResult[str]:
    match = _COVER_RE.search(html)
    if not match:
        return StrategyResult.skip("no cover asset")
    # thumbnails (_t) have a medium-sized (_m) sibling
    return StrategyResult.success(_THUMBNAIL_SUFFIX_RE.sub("_m.jpg", match.group(0)))


def _image_from_elements(soup: BeautifulSoup) -> StrategyResult[str]:
    img = soup.select_one(IMAGE_SELECTOR)
    if img is None:
        return StrategyResult.skip("no cover element")
    return StrategyResult.success(img.get("src") or img.get("data-src") or "")


def extract_image(html: str, soup: BeautifulSoup) -> str:
    result = first_success(
        (partial(_image_from_markup, html), partial(_image_from_elements, soup))
    )
    return result.value or ""


# ----------------------------
# Text fields
# ----------------------------

def _search(patterns: Sequence[re.Pattern], text: str) -> Optional[re.Match]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None


def extract_text_fields(text: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}

    players = _search(PLAYERS_PATTERNS, text)
    if players:
        fields["players_min"] = players.group(1)
        fields["players_max"] = players.group(2) if players.re.groups > 1 else players.group(1)

    age = _search(AGE_PATTERNS, text)
    if age:
        fields["age"] = age.group(1)

    time = _search(TIME_PATTERNS, text)
    if time:
        fields["time"] = time.group(1)

    rating = _search(RATING_PATTERNS, text)
    if rating:
        fields["rating"] = rating.group(1).replace(",", ".")

    rank = _search(RANK_PATTERNS, text)
    if rank:
        fields["rank"] = rank.group(1)

    # flags only ever go from "Não" to "Sim"
    if PARTY_RE.search(text):
        fields["party"] = YES
    if COOP_RE.search(text):
        fields["coop"] = YES

    return fields


def page_text(soup: BeautifulSoup) -> str:
    """Flattened body text. Without a <body> tag, everything outside <head> and <title>."""

    if soup.body is not None:
        return soup.body.get_text()
    return "".join(
        text for text in soup.strings if text.find_parent(["head", "title"]) is None
    )


def extract(html: str, source_url: Optional[str] = None) -> DraftGameRecord:
    soup = BeautifulSoup(html or "", "html.parser")

    name = extract_name(soup)
    if not name:
        raise ExtractionError("Não foi possível extrair as informações do jogo")

    text = page_text(soup)
    return DraftGameRecord(
        name=name,
        image=extract_image(html or "", soup),
        link=source_url or "",
        **extract_text_fields(text),
    )
