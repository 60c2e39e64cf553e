import pytest

from access_trace import Trace
from memory_manager import ConfigurationError
from simulator import PagingSimulator, main, run_clock, run_optimal


def make_trace(*page_ids):
    return Trace.from_page_ids(page_ids)


CLASSIC = make_trace('IA', 'IB', 'IC', 'IA', 'IB', 'ID', 'IA', 'IB', 'IC', 'ID')


def test_classic_sequence_optimal():
    faults, load_counts = run_optimal(CLASSIC, 3)
    assert faults == 5
    assert load_counts == {'IA': 1, 'IB': 1, 'IC': 2, 'ID': 1}


def test_classic_sequence_clock():
    faults, load_counts = run_clock(CLASSIC, 3)
    assert faults == 8
    assert load_counts == {'IA': 2, 'IB': 2, 'IC': 2, 'ID': 2}


@pytest.mark.parametrize('policy', [run_optimal, run_clock])
def test_single_repeated_page(policy):
    faults, load_counts = policy(make_trace('DA', 'DA', 'DA', 'DA'), 1)
    assert faults == 1
    assert load_counts == {'DA': 1}


@pytest.mark.parametrize('policy', [run_optimal, run_clock])
def test_exact_fit_never_evicts(policy):
    trace = make_trace('IA', 'IB', 'IC', 'ID')
    faults, load_counts = policy(trace, 4)
    assert faults == 4
    assert all(count == 1 for count in load_counts.values())


@pytest.mark.parametrize('policy', [run_optimal, run_clock])
def test_single_frame_alternating(policy):
    faults, load_counts = policy(make_trace('IA', 'IB', 'IA', 'IB', 'IA', 'IB'), 1)
    assert faults == 6
    assert load_counts == {'IA': 3, 'IB': 3}


@pytest.mark.parametrize('policy', [run_optimal, run_clock])
def test_zero_frames_refused(policy):
    accesses = []
    with pytest.raises(ConfigurationError):
        policy(CLASSIC, 0, observer=lambda *event: accesses.append(event))
    assert accesses == []


def test_simulator_refuses_memory_below_one_page():
    simulator = PagingSimulator(4095)
    with pytest.raises(ConfigurationError):
        simulator.run(CLASSIC)


def test_simulator_report():
    report = PagingSimulator(3 * 4096).run(CLASSIC)
    assert report.total_frames == 3
    assert report.total_accesses == 10
    assert report.distinct_pages == 4
    assert report.optimal_faults == 5
    assert report.clock_faults == 8
    assert report.efficiency == pytest.approx(62.5)


def test_simulator_skip_optimal():
    report = PagingSimulator(3 * 4096, skip_optimal=True).run(CLASSIC)
    assert report.optimal_faults is None
    assert report.optimal_load_counts == {}
    assert report.efficiency is None
    assert report.clock_faults == 8


def write_trace(tmp_path, lines):
    path = tmp_path / 'trace.txt'
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def test_main_prints_results(tmp_path, capsys):
    path = write_trace(tmp_path, [f"{i} {page}" for i, page in enumerate(CLASSIC.page_ids)])
    assert main([path, '12288', '--loadcount', '--pagetable']) == 0

    out = capsys.readouterr().out
    assert "Page faults (Optimal): 5" in out
    assert "Page faults (Clock): 8" in out
    assert "Clock algorithm efficiency: 62.50%" in out
    assert "Page IA: 2 loads" in out
    assert "Estimated table size: 32 bytes" in out


def test_main_skip_optimal(tmp_path, capsys):
    path = write_trace(tmp_path, CLASSIC.page_ids)
    assert main([path, '12288', '-skipoptimal']) == 0
    assert "N/A (optimal algorithm not run)" in capsys.readouterr().out


def test_main_didactic(tmp_path, capsys):
    path = write_trace(tmp_path, ['IA', 'IA'])
    assert main([path, '4096', '--didactic']) == 0

    out = capsys.readouterr().out
    assert "Access 1 - Page IA: Page fault" in out
    assert "Memory state: [IA(R)]" in out
    assert "Access 2 - Page IA: Hit" in out


def test_main_prints_optimal_result_before_clock_steps(tmp_path, capsys):
    path = write_trace(tmp_path, ['IA', 'IB'])
    assert main([path, '4096', '--didactic']) == 0

    out = capsys.readouterr().out
    order = [
        out.index("=== OPTIMAL ALGORITHM ==="),
        out.index("Page faults (Optimal): 2"),
        out.index("=== CLOCK ALGORITHM ==="),
        out.index("Access 1 - Page IA: Page fault"),
        out.index("Page faults (Clock): 2"),
        out.index("Clock algorithm efficiency: 100.00%"),
    ]
    assert order == sorted(order)


def test_main_warns_on_unknown_option(tmp_path, capsys):
    path = write_trace(tmp_path, CLASSIC.page_ids)
    assert main([path, '12288', '-verbose']) == 0

    out = capsys.readouterr().out
    assert "Unknown option: -verbose" in out
    assert "Page faults (Clock): 8" in out


def test_main_rejects_small_memory(tmp_path, capsys):
    path = write_trace(tmp_path, CLASSIC.page_ids)
    assert main([path, '1024']) == 1
    assert "memory size too small" in capsys.readouterr().out


def test_main_rejects_empty_trace(tmp_path, capsys):
    path = write_trace(tmp_path, ['', 'garbage'])
    assert main([path, '8192']) == 1
    assert "Error loading file" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.txt'), '8192']) == 1
    assert "Could not read trace file" in capsys.readouterr().out
