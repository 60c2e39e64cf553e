PAGE_TABLE_ENTRY_SIZE = 8  # bytes


class Frame:
    def __init__(self, page_id):
        self.page_id = page_id
        self.referenced = True
        self.load_count = 1

    def __repr__(self):
        ref = 'R' if self.referenced else 'NR'
        return f"{self.page_id}({ref})"


class FrameTable:
    """Fixed-size set of frames plus a page -> frame index map.

    Both are updated together on every insert and replacement, so a page is
    resident in at most one frame and lookup() is a dict access.
    """

    def __init__(self, num_frames):
        self.num_frames = num_frames
        self.frames = [None] * num_frames
        self.page_to_frame = {}
        # Frames are never freed, only replaced, so empty slots form a suffix.
        self._next_free = 0

    def lookup(self, page_id):
        return self.page_to_frame.get(page_id)

    def has_free_slot(self):
        return self._next_free < self.num_frames

    def insert_into_free_slot(self, page_id):
        if not self.has_free_slot():
            raise RuntimeError(f"No free frame for page {page_id}")
        if page_id in self.page_to_frame:
            raise RuntimeError(f"Page {page_id} is already resident in frame {self.page_to_frame[page_id]}")

        frame_num = self._next_free
        self.frames[frame_num] = Frame(page_id)
        self.page_to_frame[page_id] = frame_num
        self._next_free += 1
        return frame_num

    def evict_and_replace(self, frame_num, page_id):
        old_frame = self.frames[frame_num]
        if old_frame is None:
            raise RuntimeError(f"Cannot evict from empty frame {frame_num}")
        if page_id in self.page_to_frame:
            raise RuntimeError(f"Page {page_id} is already resident in frame {self.page_to_frame[page_id]}")

        del self.page_to_frame[old_frame.page_id]
        self.frames[frame_num] = Frame(page_id)
        self.page_to_frame[page_id] = frame_num
        return old_frame.page_id

    def get_frame(self, frame_num):
        return self.frames[frame_num]

    def resident_pages(self):
        return [frame.page_id for frame in self.frames if frame is not None]

    def __len__(self):
        return self.num_frames

    def __iter__(self):
        return iter(self.frames)

    def __str__(self):
        slots = [repr(frame) if frame is not None else 'empty' for frame in self.frames]
        return "Memory state: [" + ", ".join(slots) + "]"


def estimate_page_table_size(num_distinct_pages, entry_size=PAGE_TABLE_ENTRY_SIZE):
    """Bytes needed for one page table entry per distinct page."""
    return num_distinct_pages * entry_size
