from chip8vm.cpu import CPU, INSTRUCTION_PERIOD, PROGRAM_COUNTER_START
from chip8vm.display import Display

# A program that loads V1, then jumps to itself forever
SPIN_PROGRAM = b'\x61\x05\x12\x02'


def run_until(cpu, end, step):
    now = 0.0
    while now < end:
        now += step
        cpu.cycle(now)


def test_no_instruction_before_first_period(cpu) -> None:
    cpu.cpu_load_program(SPIN_PROGRAM)
    cpu.cycle(INSTRUCTION_PERIOD / 2)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START


def test_one_instruction_per_period(cpu) -> None:
    cpu.cpu_load_program(SPIN_PROGRAM)
    cpu.cycle(0.0025)
    assert cpu.cpu_registers['v'][1] == 5
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START + 2

    # Too soon for the next instruction
    cpu.cycle(0.003)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START + 2

    cpu.cycle(0.005)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START + 2


def test_instructions_do_not_touch_timers(cpu) -> None:
    cpu.cpu_load_program(SPIN_PROGRAM)
    cpu.cpu_timers['delay'] = 10
    for tick in range(1, 7):
        cpu.cycle(tick * 0.0025)
    assert cpu.cpu_timers['delay'] == 10


def test_delay_timer_runs_down_in_one_second(cpu) -> None:
    cpu.cpu_timers['delay'] = 60
    cpu.cpu_awaiting_key = 0
    run_until(cpu, 1.0, 1.0 / 60)
    assert cpu.cpu_timers['delay'] == 0
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START

    run_until(cpu, 2.0, 1.0 / 60)
    assert cpu.cpu_timers['delay'] == 0


def test_timers_tick_while_program_runs(cpu) -> None:
    cpu.cpu_load_program(SPIN_PROGRAM)
    cpu.cpu_timers['delay'] = 60
    run_until(cpu, 0.5, 0.0025)
    assert 28 <= cpu.cpu_timers['delay'] <= 32


def test_sound_timer_buzzes_each_tick(cpu, screen) -> None:
    cpu.cpu_timers['sound'] = 3
    cpu.cpu_awaiting_key = 0
    run_until(cpu, 0.5, 1.0 / 60)
    assert cpu.cpu_timers['sound'] == 0
    assert screen.buzz_count == 3


def test_waiting_for_key_starves_instructions_only(cpu) -> None:
    # F10A, then 6205
    cpu.cpu_load_program(b'\xF1\x0A\x62\x05')
    cpu.cpu_timers['delay'] = 5
    cpu.cycle(0.0025)
    assert cpu.cpu_awaiting_key == 1

    cpu.cycle(0.02)
    cpu.cycle(0.04)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START + 2
    assert cpu.cpu_timers['delay'] == 3

    cpu.cpu_resume_with_key(0x4)
    cpu.cycle(0.045)
    assert cpu.cpu_registers['v'][1] == 0x4
    assert cpu.cpu_registers['v'][2] == 0x5


def test_start_time_offsets_both_clocks() -> None:
    cpu = CPU(Display(), start_time=100.0)
    cpu.cpu_load_program(SPIN_PROGRAM)
    cpu.cpu_timers['delay'] = 1
    cpu.cycle(100.001)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START
    assert cpu.cpu_timers['delay'] == 1
    cpu.cycle(100.02)
    assert cpu.cpu_registers['pc'] == PROGRAM_COUNTER_START + 2
    assert cpu.cpu_timers['delay'] == 0
