"""Register load and arithmetic opcodes, including flag-register quirks."""

from __future__ import annotations

import pytest

from chipette.system import Machine


def run(machine: Machine, steps: int) -> None:
    for _ in range(steps):
        machine.cpu.step()


@pytest.mark.parametrize("x", [0x0, 0x5, 0xE])
@pytest.mark.parametrize("nn", [0x00, 0x7F, 0xFF])
def test_load_then_add_zero_keeps_value(make_machine, x: int, nn: int) -> None:
    machine = make_machine(0x6000 | (x << 8) | nn, 0x7000 | (x << 8))
    run(machine, 2)

    assert machine.cpu.state.v[x] == nn


def test_add_immediate_wraps_without_touching_vf(make_machine) -> None:
    machine = make_machine(0x6AFF, 0x6F07, 0x7A02)
    run(machine, 3)

    assert machine.cpu.state.v[0xA] == 0x01
    assert machine.cpu.state.v[0xF] == 0x07


def test_ld_register_copies(make_machine) -> None:
    machine = make_machine(0x6133, 0x8210)
    run(machine, 2)

    assert machine.cpu.state.v[2] == 0x33


@pytest.mark.parametrize(
    "low, expected",
    [
        (0x1, 0b1110),  # OR
        (0x2, 0b1000),  # AND
        (0x3, 0b0110),  # XOR
    ],
)
def test_logic_ops_clear_vf(make_machine, low: int, expected: int) -> None:
    machine = make_machine(0x610C, 0x620A, 0x6F01, 0x8120 | low)
    run(machine, 4)

    assert machine.cpu.state.v[1] == expected
    assert machine.cpu.state.v[0xF] == 0


def test_add_register_sets_carry(make_machine) -> None:
    machine = make_machine(0x61FF, 0x6201, 0x8124)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0x00
    assert machine.cpu.state.v[0xF] == 1


def test_add_register_without_carry_clears_vf(make_machine) -> None:
    machine = make_machine(0x6101, 0x6201, 0x6F01, 0x8124)
    run(machine, 4)

    assert machine.cpu.state.v[1] == 0x02
    assert machine.cpu.state.v[0xF] == 0


def test_sub_sets_no_borrow_flag_when_equal(make_machine) -> None:
    machine = make_machine(0x6105, 0x6205, 0x8125)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0x00
    assert machine.cpu.state.v[0xF] == 1


def test_sub_with_borrow_wraps_and_clears_flag(make_machine) -> None:
    machine = make_machine(0x6103, 0x6205, 0x8125)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0xFE
    assert machine.cpu.state.v[0xF] == 0


def test_subn_reverses_operands(make_machine) -> None:
    machine = make_machine(0x6103, 0x6205, 0x8127)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0x02
    assert machine.cpu.state.v[0xF] == 1


def test_subn_with_borrow(make_machine) -> None:
    machine = make_machine(0x6105, 0x6203, 0x8127)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0xFE
    assert machine.cpu.state.v[0xF] == 0


def test_shift_right_reads_vy_not_vx(make_machine) -> None:
    # VX=0x02 (bit0 clear), VY=0x05 (bit0 set)
    machine = make_machine(0x6102, 0x6205, 0x8126)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0x02
    assert machine.cpu.state.v[0xF] == 1
    assert machine.cpu.state.v[2] == 0x05


def test_shift_left_reads_vy_not_vx(make_machine) -> None:
    # VX=0x80 (bit7 set), VY=0x41 (bit7 clear)
    machine = make_machine(0x6180, 0x6241, 0x812E)
    run(machine, 3)

    assert machine.cpu.state.v[1] == 0x82
    assert machine.cpu.state.v[0xF] == 0


def test_shift_left_wraps_and_sets_flag(make_machine) -> None:
    machine = make_machine(0x62C1, 0x812E)
    run(machine, 2)

    assert machine.cpu.state.v[1] == 0x82
    assert machine.cpu.state.v[0xF] == 1


def test_flag_written_after_result_when_x_is_vf(make_machine) -> None:
    machine = make_machine(0x6FFF, 0x6201, 0x8F24)
    run(machine, 3)

    assert machine.cpu.state.v[0xF] == 1


def test_random_is_masked_and_seeded(make_machine) -> None:
    first = make_machine(0xC10F)
    second = make_machine(0xC10F)
    run(first, 1)
    run(second, 1)

    assert first.cpu.state.v[1] <= 0x0F
    assert first.cpu.state.v[1] == second.cpu.state.v[1]


def test_random_with_zero_mask_is_zero(make_machine) -> None:
    machine = make_machine(0x61AA, 0xC100)
    run(machine, 2)

    assert machine.cpu.state.v[1] == 0
