import pytest

from ludoteca.library.text import collation_key, normalize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Médio", "medio"),
        ("MEDIO", "medio"),
        ("Médio-Pesado", "medio-pesado"),
        ("Ação", "acao"),
        ("", ""),
    ],
)
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["Médio", "ÉPICO", "Çà et là", "İstanbul"])
def test_normalize_is_idempotent(raw):
    assert normalize(normalize(raw)) == normalize(raw)


def test_collation_ignores_accents_before_case():
    names = ["Zombicide", "Ágora", "azul", "Azul"]
    assert sorted(names, key=collation_key) == ["Ágora", "azul", "Azul", "Zombicide"]


def test_collation_puts_unaccented_and_lowercase_first():
    names = ["Ágora", "agora", "AGORA", "Agora"]
    assert sorted(names, key=collation_key) == ["agora", "Agora", "AGORA", "Ágora"]
