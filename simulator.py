import argparse
import sys
from bisect import bisect_right

from access_trace import TraceError, load_trace
from memory_manager import (PAGE_SIZE, ConfigurationError, Statistics, check_capacity, frames_for_memory,
                            sorted_load_counts)
from page_table import PAGE_TABLE_ENTRY_SIZE, FrameTable, estimate_page_table_size


def next_use_positions(trace):
    """Map each page to the ascending list of positions where it is accessed."""
    positions = {}
    for i, page_id in enumerate(trace.page_ids):
        positions.setdefault(page_id, []).append(i)
    return positions


def run_optimal(trace, capacity, observer=None):
    """
    Optimal replacement: evict the resident page whose next use lies
    furthest in the future, or any page that is never used again.

    Ties go to the lowest frame index. Returns (page_faults, load_counts).
    """
    check_capacity(capacity)

    frame_table = FrameTable(capacity)
    stats = Statistics(len(trace.distinct_pages))
    positions = next_use_positions(trace)
    never = len(trace)

    for i, page_id in enumerate(trace.page_ids):
        if frame_table.lookup(page_id) is not None:
            if observer is not None:
                observer(i, page_id, True, frame_table)
            continue

        stats.record_page_fault(page_id)

        if frame_table.has_free_slot():
            frame_table.insert_into_free_slot(page_id)
        else:
            farthest_next_use = -1
            victim_frame = None

            for frame_num, frame in enumerate(frame_table):
                page_positions = positions[frame.page_id]
                search_index = bisect_right(page_positions, i)
                if search_index == len(page_positions):
                    next_use = never
                else:
                    next_use = page_positions[search_index]

                if next_use > farthest_next_use:
                    farthest_next_use = next_use
                    victim_frame = frame_num

                if next_use == never:
                    break

            if victim_frame is None:
                raise RuntimeError(f"OPT found no victim for page {page_id} at position {i}")
            frame_table.evict_and_replace(victim_frame, page_id)

        if observer is not None:
            observer(i, page_id, False, frame_table)

    return stats.page_faults, stats.load_counts


def run_clock(trace, capacity, observer=None):
    """
    Clock (second chance) replacement.

    A hit sets the frame's reference bit. On a fault with memory full, the
    hand sweeps forward clearing reference bits and replaces the first
    unreferenced frame, then rests one past it. Returns
    (page_faults, load_counts).
    """
    check_capacity(capacity)

    frame_table = FrameTable(capacity)
    stats = Statistics(len(trace.distinct_pages))
    clock_hand = 0

    for i, page_id in enumerate(trace.page_ids):
        frame_num = frame_table.lookup(page_id)
        if frame_num is not None:
            frame_table.get_frame(frame_num).referenced = True
            if observer is not None:
                observer(i, page_id, True, frame_table)
            continue

        stats.record_page_fault(page_id)

        if frame_table.has_free_slot():
            frame_table.insert_into_free_slot(page_id)
        else:
            # Every visited bit is cleared, so the second lap must find a victim.
            for _ in range(2 * capacity):
                frame = frame_table.get_frame(clock_hand)
                if not frame.referenced:
                    frame_table.evict_and_replace(clock_hand, page_id)
                    clock_hand = (clock_hand + 1) % capacity
                    break
                frame.referenced = False
                clock_hand = (clock_hand + 1) % capacity
            else:
                raise RuntimeError(f"Clock sweep found no victim for page {page_id} at position {i}")

        if observer is not None:
            observer(i, page_id, False, frame_table)

    return stats.page_faults, stats.load_counts


def print_access(position, page_id, hit, frame_table):
    if hit:
        print(f"Access {position + 1} - Page {page_id}: Hit")
        return
    print(f"Access {position + 1} - Page {page_id}: Page fault")
    print(frame_table)
    print("---")


class SimulationReport:
    def __init__(self, memory_size, total_frames, total_accesses, distinct_pages,
                 optimal_faults, optimal_load_counts, clock_faults, clock_load_counts):
        self.memory_size = memory_size
        self.total_frames = total_frames
        self.total_accesses = total_accesses
        self.distinct_pages = distinct_pages
        self.optimal_faults = optimal_faults  # None when OPT was skipped
        self.optimal_load_counts = optimal_load_counts
        self.clock_faults = clock_faults
        self.clock_load_counts = clock_load_counts

    @property
    def efficiency(self):
        return clock_efficiency(self.optimal_faults, self.clock_faults)


def clock_efficiency(optimal_faults, clock_faults):
    """OPT faults as a percentage of clock faults, or None when undefined."""
    if optimal_faults is None or optimal_faults <= 0 or clock_faults <= 0:
        return None
    return optimal_faults / clock_faults * 100


def estimate_execution_time(total_accesses, skip_optimal):
    if skip_optimal:
        return "< 5 seconds"
    if total_accesses < 1000000:
        return "1-5 seconds"
    elif total_accesses < 10000000:
        return "5-20 seconds"
    return "May take more than 30 seconds"


class PagingSimulator:

    def __init__(self, memory_size, skip_optimal=False, didactic=False,
                 show_load_count=False, show_page_table=False):
        self.memory_size = memory_size
        self.total_frames = memory_size // PAGE_SIZE
        self.skip_optimal = skip_optimal
        self.didactic = didactic
        self.show_load_count = show_load_count
        self.show_page_table = show_page_table

    def run(self, trace, verbose=False):
        """Run OPT (unless skipped) then clock, printing each result as it finishes when verbose."""
        total_frames = frames_for_memory(self.memory_size)

        optimal_faults = None
        optimal_load_counts = {}
        if verbose:
            print("=== OPTIMAL ALGORITHM ===")
        if not self.skip_optimal:
            optimal_faults, optimal_load_counts = run_optimal(trace, total_frames)
            if verbose:
                print(f"Page faults (Optimal): {optimal_faults}")
        elif verbose:
            print("Optimal algorithm skipped (--skipoptimal)")

        if verbose:
            print("\n=== CLOCK ALGORITHM ===")
        observer = print_access if self.didactic else None
        clock_faults, clock_load_counts = run_clock(trace, total_frames, observer=observer)
        if verbose:
            print(f"Page faults (Clock): {clock_faults}")

        return SimulationReport(
            memory_size=self.memory_size,
            total_frames=total_frames,
            total_accesses=len(trace),
            distinct_pages=len(trace.distinct_pages),
            optimal_faults=optimal_faults,
            optimal_load_counts=optimal_load_counts,
            clock_faults=clock_faults,
            clock_load_counts=clock_load_counts,
        )

    def print_header(self, trace):
        print("=== PAGING SIMULATOR ===")
        print(f"Physical memory size: {self.memory_size} bytes ({self.memory_size / (1024 * 1024):.2f} MB)")
        print(f"Page size: {PAGE_SIZE} bytes")
        print(f"Number of frames: {self.total_frames}")
        print(f"Number of accesses: {len(trace)}")
        print(f"Distinct pages: {len(trace.distinct_pages)}")
        print(f"Estimated time: {estimate_execution_time(len(trace), self.skip_optimal)}")
        print()

    def print_summary(self, report):
        efficiency = report.efficiency
        if efficiency is not None:
            print(f"Clock algorithm efficiency: {efficiency:.2f}%")
        elif report.optimal_faults is None:
            print("Clock algorithm efficiency: N/A (optimal algorithm not run)")
        else:
            print("Clock algorithm efficiency: N/A (no page faults)")

        if self.show_load_count:
            print("\n=== LOADS PER PAGE ===")
            for page_id, count in sorted_load_counts(report.clock_load_counts):
                print(f"Page {page_id}: {count} loads")

        if self.show_page_table:
            table_size = estimate_page_table_size(report.distinct_pages)
            print("\n=== ESTIMATED PAGE TABLE SIZE ===")
            print(f"Distinct pages accessed: {report.distinct_pages}")
            print(f"Size per entry: {PAGE_TABLE_ENTRY_SIZE} bytes")
            print(f"Estimated table size: {table_size} bytes ({table_size / 1024.0:.2f} KB)")

    def run_simulation(self, trace):
        self.print_header(trace)
        report = self.run(trace, verbose=True)
        self.print_summary(report)
        return report


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate optimal and clock page replacement over an access trace.")
    parser.add_argument('trace_file', type=str)
    parser.add_argument('memory_size', type=int, help="physical memory size in bytes")
    parser.add_argument('-didactic', '--didactic', action='store_true',
                        help="print memory state after each clock access")
    parser.add_argument('-loadcount', '--loadcount', action='store_true',
                        help="print the number of loads per page")
    parser.add_argument('-pagetable', '--pagetable', action='store_true',
                        help="print the estimated page table size")
    parser.add_argument('-skipoptimal', '--skipoptimal', action='store_true',
                        help="skip the optimal algorithm (for very large traces)")
    parser.add_argument('-all', '--all', action='store_true',
                        help="same as --didactic --loadcount --pagetable")
    args, unknown = parser.parse_known_args(argv)
    for option in unknown:
        print(f"Unknown option: {option}")
    return args


def main(argv=None):
    args = parse_args(argv)

    if args.memory_size < PAGE_SIZE:
        print(f"Error: memory size too small ({args.memory_size} bytes).")
        print(f"Minimum required: {PAGE_SIZE} bytes (1 page of 4KB)")
        return 1

    simulator = PagingSimulator(
        args.memory_size,
        skip_optimal=args.skipoptimal,
        didactic=args.didactic or args.all,
        show_load_count=args.loadcount or args.all,
        show_page_table=args.pagetable or args.all,
    )

    print(f"Loading file: {args.trace_file}")
    try:
        trace = load_trace(args.trace_file)
    except TraceError as e:
        print(f"Error loading file: {e}")
        return 1
    print("File loaded successfully!\n")

    try:
        simulator.run_simulation(trace)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
