from ludoteca.utils.convert import is_affirmative, to_float, to_int


def test_to_int_reads_leading_number():
    assert to_int("10+") == 10
    assert to_int("3 a 4") == 3
    assert to_int(" 60 min") == 60
    assert to_int(12) == 12


def test_to_int_falls_back_to_default():
    assert to_int("") is None
    assert to_int(None, 99) == 99
    assert to_int("abc", 0) == 0


def test_to_float_accepts_comma_separator():
    assert to_float("7,5") == 7.5
    assert to_float("8.25") == 8.25
    assert to_float("nota", 0.0) == 0.0
    assert to_float(None) is None


def test_is_affirmative():
    assert is_affirmative("Sim")
    assert is_affirmative("yes")
    assert not is_affirmative("Não")
    assert not is_affirmative("NO")
    assert not is_affirmative("")
    assert not is_affirmative(None)
