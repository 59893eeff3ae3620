'''
Machine session tests, through submit() and typed keys
'''

from deskcalc.accumulator import Function, Kind, Operator
from deskcalc.machine import Machine

from pytest import approx, raises


def test_submit_scenario(machine):
    machine.submit(Kind.DIGIT, '3')
    machine.submit(Kind.OPERATOR, '+')
    machine.submit(Kind.DIGIT, '4')
    display = machine.submit(Kind.EQUALS)
    assert display.operand_text == '7'
    assert display.history_text == '3 + 4 ='
    assert not display.is_error


def test_submit_accepts_enum_payloads(machine):
    machine.submit('digit', '6')
    machine.submit(Kind.OPERATOR, Operator.DIVIDE)
    machine.submit(Kind.DIGIT, '4')
    assert machine.submit(Kind.EQUALS).operand_text == '1.5'
    machine.submit(Kind.UNARY_FUNCTION, Function.SQR)
    assert machine.display().operand_text == '2.25'


def test_submit_unknown_operator(machine):
    machine.submit(Kind.DIGIT, '6')
    with raises(ValueError):
        machine.submit(Kind.OPERATOR, '%')


def test_empty_display_is_zero(machine):
    assert machine.display() == ('0', '', False)


def test_angle_mode(machine):
    assert machine.get_angle_mode() is False
    machine.set_angle_mode(True)
    assert machine.get_angle_mode() is True
    machine.submit(Kind.CLEAR)
    assert machine.get_angle_mode() is True
    assert Machine(degrees=True).get_angle_mode() is True


def test_typed_sum(press):
    assert press('3 + 4 =') == ('7', '3 + 4 =', False)


def test_typed_division_by_zero(press):
    display = press('5/0=')
    assert display.operand_text == 'Error'
    assert display.is_error


def test_typed_square_root(press):
    assert press('9 sqrt') == ('3', '√9 =', False)


def test_typed_root_symbol(press):
    assert press('16√').operand_text == '4'


def test_typed_toggle_twice(press):
    assert press('- 5 n n').operand_text == '5'
    assert press('±').operand_text == '-5'


def test_typed_backspace(press):
    press('3 + 45')
    assert press('<') == ('45', '', False)
    assert press('<') == ('4', '', False)


def test_typed_clear(press):
    assert press('3 + 4 c') == ('0', '', False)


def test_typed_degrees(press):
    display = press('deg 30 sin')
    assert float(display.operand_text) == approx(0.5)
    assert press.machine.get_angle_mode() is True
    press('rad')
    assert press.machine.get_angle_mode() is False


def test_typed_euler(press):
    assert float(press('e').operand_text) == approx(2.718281828459045)


def test_typed_power_chain(press):
    assert press('2 ^ 3 + 1 =') == ('9', '2 ^ 3 + 1 =', False)


def test_parse_number_into_key_presses(machine):
    tokens = list(machine.parse({'number': '1.5'}))
    assert [token.kind for token in tokens] == [Kind.DIGIT,
                                                Kind.DECIMAL_POINT,
                                                Kind.DIGIT]
