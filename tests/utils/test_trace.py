from chipette.cpu import CPUState
from chipette.utils.trace import TraceRecorder


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(CPUState(pc=0x200), 0x6133, mnemonic="LD Vx,NN")
    recorder.record_step(CPUState(pc=0x202, index=0x300), 0xA300, mnemonic="LD I,NNN")
    state3 = CPUState(pc=0x204, delay_timer=0x10)
    state3.v[0xF] = 0x01
    state3.stack.push(0x206)
    recorder.record_step(state3, 0xF00A, mnemonic="LD Vx,K", note="key-wait")

    lines = list(recorder.format_entries())
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "I=0300" in lines[0]
    assert "pc=0204" in lines[1]
    assert "DT=10" in lines[1]
    assert "SP=01" in lines[1]
    assert "note=key-wait" in lines[1]
    assert lines[1].split("V=[")[1].startswith("00 ")
    assert "01]" in lines[1]


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(CPUState(pc=0x200), None, note="fault")

    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert "note=fault" in lines[0]
    assert recorder.last_entry().pc == 0x200


def test_trace_recorder_rejects_empty_capacity():
    import pytest

    with pytest.raises(ValueError):
        TraceRecorder(0)
