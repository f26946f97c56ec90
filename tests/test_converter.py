import pytest

from core.converter import BACKSPACE_KEY, CLEAR_KEY, Field, TriFieldConverter
from core.vat_utils import VatRate


def type_in(conv, text):
    for ch in text:
        conv.press(ch)


@pytest.fixture
def conv():
    return TriFieldConverter()


def test_initial_state(conv):
    assert conv.active is Field.GROSS
    assert conv.rate is VatRate.TWENTY_THREE
    assert (conv.net_text, conv.gross_text, conv.vat_text) == ('', '', '')


def test_gross_123_at_23_percent(conv):
    type_in(conv, '123,00')
    assert conv.gross_text == '123,00'
    assert conv.net_text == '100.00'
    assert conv.vat_text == '23.00'


def test_from_net(conv):
    conv.set_active(Field.NET)
    type_in(conv, '200')
    conv.set_rate(VatRate.EIGHT)
    assert conv.gross_text == '216.00'
    assert conv.vat_text == '16.00'


def test_from_vat_amount(conv):
    conv.set_active(Field.VAT)
    type_in(conv, '23')
    assert conv.net_text == '100.00'
    assert conv.gross_text == '123.00'


def test_vat_amount_at_zero_rate_blanks_others(conv):
    conv.set_rate(VatRate.ZERO)
    conv.set_active(Field.VAT)
    type_in(conv, '50')
    assert conv.vat_text == '50'
    assert conv.net_text == ''
    assert conv.gross_text == ''


def test_rate_change_recomputes(conv):
    type_in(conv, '105')
    conv.set_rate(VatRate.FIVE)
    assert conv.net_text == '100.00'
    assert conv.vat_text == '5.00'
    conv.set_rate(VatRate.ZERO)
    assert conv.net_text == '105.00'
    assert conv.vat_text == '0.00'


def test_backspace_on_empty_is_noop(conv):
    seen = []
    conv.subscribe(seen.append)
    conv.backspace()
    assert (conv.net_text, conv.gross_text, conv.vat_text) == ('', '', '')
    assert seen == []


def test_backspace_recomputes(conv):
    type_in(conv, '1230')
    conv.press(BACKSPACE_KEY)
    assert conv.gross_text == '123'
    assert conv.net_text == '100.00'
    conv.backspace()
    conv.backspace()
    conv.backspace()
    assert conv.gross_text == ''
    assert conv.net_text == ''
    assert conv.vat_text == ''


def test_second_separator_is_ignored(conv):
    type_in(conv, '12,')
    conv.append_separator()
    assert conv.gross_text == '12,'
    conv.press('.')
    assert conv.gross_text == '12,'


def test_separator_on_empty_gets_leading_zero(conv):
    conv.append_separator()
    assert conv.gross_text == '0,'
    assert conv.net_text == '0.00'


def test_dot_separator():
    conv = TriFieldConverter(separator='.')
    type_in(conv, '12.3')
    assert conv.gross_text == '12.3'
    assert conv.net_text == '10.00'


def test_unsupported_separator():
    with pytest.raises(ValueError):
        TriFieldConverter(separator=';')


def test_switching_active_field_is_inert(conv):
    type_in(conv, '123')
    before = conv.snapshot()
    conv.set_active(Field.NET)
    after = conv.snapshot()
    assert after.texts == before.texts
    assert after.active is Field.NET
    # typing now continues the net text
    conv.press('5')
    assert conv.net_text == '100.005'


def test_separator_after_switching_to_derived_field(conv):
    type_in(conv, '123')
    conv.set_active(Field.NET)
    conv.press(',')
    assert conv.net_text == '100.00'
    assert conv.net_text.count(',') + conv.net_text.count('.') <= 1
    # gross keeps its typed text and vat stays populated
    assert conv.gross_text == '123'
    assert conv.vat_text == '23.00'


def test_separator_after_switching_with_dot_separator():
    conv = TriFieldConverter(separator='.')
    type_in(conv, '123')
    conv.set_active(Field.VAT)
    conv.press('.')
    assert conv.vat_text == '23.00'


def test_rate_change_with_vat_active(conv):
    conv.set_active(Field.VAT)
    type_in(conv, '23')
    assert conv.net_text == '100.00'
    conv.set_rate(VatRate.ZERO)
    assert conv.vat_text == '23'
    assert conv.net_text == ''
    assert conv.gross_text == ''
    conv.set_rate(VatRate.FIVE)
    assert conv.net_text == '460.00'
    assert conv.gross_text == '483.00'


def test_rate_change_with_net_active(conv):
    conv.set_active(Field.NET)
    type_in(conv, '100')
    assert conv.gross_text == '123.00'
    conv.set_rate(VatRate.ZERO)
    assert conv.gross_text == '100.00'
    assert conv.vat_text == '0.00'
    conv.set_rate(VatRate.FIVE)
    assert conv.gross_text == '105.00'
    assert conv.vat_text == '5.00'


def test_effective_rate(conv):
    assert conv.effective_rate() is None
    type_in(conv, '123')
    assert conv.effective_rate() == pytest.approx(0.23)
    conv.set_rate(VatRate.EIGHT)
    assert conv.effective_rate() == pytest.approx(0.08, abs=1e-3)
    conv.set_text(Field.GROSS, 'abc')
    assert conv.effective_rate() is None


def test_invalid_text_blanks_dependents(conv):
    type_in(conv, '123')
    conv.set_text(Field.GROSS, 'abc')
    assert conv.gross_text == 'abc'
    assert conv.net_text == ''
    assert conv.vat_text == ''


def test_negative_text_blanks_dependents(conv):
    conv.set_active(Field.NET)
    type_in(conv, '10')
    conv.set_text(Field.NET, '-10')
    assert conv.gross_text == ''
    assert conv.vat_text == ''


def test_invalid_and_never_typed_look_the_same(conv):
    fresh = conv.snapshot()
    conv.set_text(Field.GROSS, 'abc')
    conv.set_text(Field.GROSS, '')
    assert conv.snapshot() == fresh


def test_clear(conv):
    type_in(conv, '99')
    conv.press(CLEAR_KEY)
    assert (conv.net_text, conv.gross_text, conv.vat_text) == ('', '', '')
    assert conv.active is Field.GROSS


def test_append_digit_rejects_non_digits(conv):
    with pytest.raises(ValueError):
        conv.append_digit('x')
    with pytest.raises(ValueError):
        conv.append_digit('12')


def test_unknown_key_is_ignored(conv):
    conv.press('%')
    assert conv.gross_text == ''


def test_subscribers_get_snapshots(conv):
    seen = []
    unsubscribe = conv.subscribe(seen.append)
    conv.press('1')
    conv.set_active(Field.VAT)
    assert [s.active for s in seen] == [Field.GROSS, Field.VAT]
    assert seen[0].gross_text == '1'
    unsubscribe()
    conv.press('2')
    assert len(seen) == 2


@pytest.mark.parametrize('rate', list(VatRate))
def test_net_plus_vat_equals_gross(conv, rate):
    conv.set_rate(rate)
    type_in(conv, '987,65')
    assert float(conv.net_text) + float(conv.vat_text) == pytest.approx(987.65, abs=0.01)
