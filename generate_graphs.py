import sys

import matplotlib.pyplot as plt

from access_trace import TraceError, load_trace
from memory_manager import PAGE_SIZE, ConfigurationError, frames_for_memory
from simulator import run_clock, run_optimal

DEFAULT_MEMORY_SIZES = [8192, 16384, 32768, 65536, 131072]


def collect_fault_counts(trace, memory_sizes):
    results = {'OPT': [], 'CLOCK': []}
    for memory_size in memory_sizes:
        total_frames = frames_for_memory(memory_size)
        optimal_faults, _ = run_optimal(trace, total_frames)
        clock_faults, _ = run_clock(trace, total_frames)
        results['OPT'].append(optimal_faults)
        results['CLOCK'].append(clock_faults)
    return results


def plot_fault_counts(memory_sizes, results, output='policy_comparison.png'):
    fig, ax = plt.subplots(figsize=(10, 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    x = range(len(memory_sizes))
    width = 0.35
    bars_opt = ax.bar([i - width/2 for i in x], results['OPT'], width, label='OPT')
    bars_clock = ax.bar([i + width/2 for i in x], results['CLOCK'], width, label='CLOCK')

    for bar in list(bars_opt) + list(bars_clock):
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height,
                f'{int(height)}', ha='center', va='bottom', fontsize=9)

    ax.set_title('Page Faults')
    ax.set_xlabel('Frames')
    ax.set_xticks(list(x))
    ax.set_xticklabels([str(size // PAGE_SIZE) for size in memory_sizes])
    ax.grid(axis='y', alpha=0.3)
    ax.legend()

    plt.tight_layout()
    fig.savefig(output, dpi=300, bbox_inches='tight')
    plt.close(fig)
    return output


def main(argv):
    if len(argv) < 2:
        print("Usage: python generate_graphs.py <trace_file> [memory_size ...]")
        return 1

    try:
        memory_sizes = [int(size) for size in argv[2:]] or DEFAULT_MEMORY_SIZES
    except ValueError as e:
        print(f"Error: invalid memory size: {e}")
        return 1

    try:
        trace = load_trace(argv[1])
    except TraceError as e:
        print(f"Error loading file: {e}")
        return 1

    print("Running simulations...")
    try:
        results = collect_fault_counts(trace, memory_sizes)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return 1
    output = plot_fault_counts(memory_sizes, results)
    print(f"\nGraph saved as '{output}'")
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
