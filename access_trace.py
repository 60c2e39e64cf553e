from enum import Enum


MAX_REPORTED_INVALID_LINES = 10


class TraceError(ValueError):
    pass


class PageKind(Enum):
    INSTRUCTION = 'I'
    DATA = 'D'


class AccessRecord:
    __slots__ = ('page_id', 'kind')

    def __init__(self, page_id):
        if not is_valid_page_id(page_id):
            raise TraceError(f"Invalid page id: {page_id!r}")
        object.__setattr__(self, 'page_id', page_id)
        object.__setattr__(self, 'kind', PageKind(page_id[0]))

    def __setattr__(self, name, value):
        raise AttributeError("AccessRecord is immutable")

    def __eq__(self, other):
        return isinstance(other, AccessRecord) and other.page_id == self.page_id

    def __hash__(self):
        return hash(self.page_id)

    def __repr__(self):
        return f"AccessRecord({self.page_id!r}, {self.kind.name})"


def is_valid_page_id(page_id):
    return len(page_id) >= 2 and page_id[0] in ('I', 'D')


class Trace:
    """Ordered, read-only sequence of page accesses.

    Positions in the trace are the simulation's notion of time. The set of
    distinct pages is computed once here and shared by every policy run.
    """

    def __init__(self, records):
        self._records = tuple(records)
        if not self._records:
            raise TraceError("Trace contains no valid accesses")
        self._page_ids = [record.page_id for record in self._records]
        self.distinct_pages = frozenset(self._page_ids)

    @classmethod
    def from_page_ids(cls, page_ids):
        return cls(AccessRecord(page_id) for page_id in page_ids)

    @property
    def page_ids(self):
        return self._page_ids

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __repr__(self):
        return f"Trace({len(self)} accesses, {len(self.distinct_pages)} distinct pages)"


class LoadSummary:
    def __init__(self, lines_read, valid_accesses, invalid_lines):
        self.lines_read = lines_read
        self.valid_accesses = valid_accesses
        self.invalid_lines = invalid_lines

    def __str__(self):
        return (f"File processed: {self.lines_read} lines read, "
                f"{self.valid_accesses} valid accesses, "
                f"{self.invalid_lines} invalid lines")


def parse_trace_lines(lines):
    """
    Parse trace lines into a Trace.

    Each line is either "<index> <pageId>" or a bare "<pageId>"; blank lines
    are ignored and malformed lines are skipped, with only the first
    MAX_REPORTED_INVALID_LINES of them reported.
    """
    records = []
    line_count = 0
    invalid_lines = 0

    for line in lines:
        line_count += 1
        line = line.strip()
        if not line:
            continue

        parts = line.split()
        page_id = parts[1] if len(parts) >= 2 else parts[0]

        if not is_valid_page_id(page_id):
            invalid_lines += 1
            if invalid_lines <= MAX_REPORTED_INVALID_LINES:
                print(f"Warning: line {line_count} skipped (invalid page format): {line}")
            continue

        records.append(AccessRecord(page_id))

    if invalid_lines > MAX_REPORTED_INVALID_LINES:
        print(f"... and {invalid_lines - MAX_REPORTED_INVALID_LINES} more invalid lines (not shown)")

    trace = Trace(records)
    return trace, LoadSummary(line_count, len(records), invalid_lines)


def load_trace(filename):
    try:
        # Undecodable bytes become U+FFFD and fail page id validation like any bad line.
        with open(filename, 'r', encoding='utf-8', errors='replace') as f:
            trace, summary = parse_trace_lines(f)
    except OSError as e:
        raise TraceError(f"Could not read trace file {filename}: {e}") from e

    print(summary)
    return trace
