PAGE_SIZE = 4096  # bytes


class ConfigurationError(ValueError):
    pass


def frames_for_memory(memory_size, page_size=PAGE_SIZE):
    total_frames = memory_size // page_size
    if total_frames < 1:
        raise ConfigurationError(
            f"Memory too small ({memory_size} bytes). "
            f"Minimum required: {page_size} bytes (1 page)")
    return total_frames


def check_capacity(capacity):
    if capacity < 1:
        raise ConfigurationError(f"Frame capacity must be at least 1, got {capacity}")


class Statistics:
    def __init__(self, distinct_pages=0):
        self.page_faults = 0
        self.load_counts = {}
        self.distinct_pages = distinct_pages

    def record_page_fault(self, page_id):
        self.page_faults += 1
        self.load_counts[page_id] = self.load_counts.get(page_id, 0) + 1



def sorted_load_counts(load_counts):
    """Load counts as (page_id, count) pairs ordered by page id."""
    return sorted(load_counts.items())
