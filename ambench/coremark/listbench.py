"""Linked-list kernel of CoreMark: find, reverse, sort and CRC over a list."""

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from ambench.coremark.crc import crc16, crcu16
from ambench.coremark.matrix import MatrixParams, bench_matrix
from ambench.coremark.state import bench_state

_ITEM_BYTES = 16 + 4


def _s16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


@dataclass
class ListData:
    """Payload of a list cell: a 16-bit data word and its original index."""

    data16: int = 0
    idx: int = 0


@dataclass(eq=False)
class ListNode:
    """A cell of a singly linked list."""

    info: ListData
    next: Optional["ListNode"] = None

    def __iter__(self) -> Iterator["ListNode"]:
        node: Optional[ListNode] = self
        while node is not None:
            yield node
            node = node.next


@dataclass
class CoreResults:
    """Inputs, working data and outputs of one CoreMark context."""

    seed1: int = 0
    seed2: int = 0
    seed3: int = 0
    size: int = 0
    iterations: int = 0
    execs: int = 7
    list: Optional[ListNode] = None
    mat: Optional[MatrixParams] = None
    state: bytearray = field(default_factory=bytearray)
    crc: int = 0
    crclist: int = 0
    crcmatrix: int = 0
    crcstate: int = 0
    err: int = 0


Comparator = Callable[[ListData, ListData, Optional[CoreResults]], int]


def calc_func(info: ListData, results: Optional[CoreResults]) -> int:
    """Return the 7-bit value of ``info.data16``, computing and caching it if needed.

    Computing it runs the state or matrix kernel, folds the result into
    ``results.crc`` and records the first state/matrix CRC seen.
    """
    data = info.data16
    if (data >> 7) & 1:
        return data & 0x007F
    if results is None:
        raise ValueError("results are required to compute an uncached value")

    flag = data & 0x7
    dtype = (data >> 3) & 0xF
    dtype |= dtype << 4
    if flag == 0:
        if dtype < 0x22:
            dtype = 0x22
        retval = _s16(bench_state(results.size, results.state, results.seed1,
                                  results.seed2, dtype, results.crc))
        if results.crcstate == 0:
            results.crcstate = retval & 0xFFFF
    elif flag == 1:
        if results.mat is None:
            raise ValueError("matrix data has not been initialised")
        retval = _s16(bench_matrix(results.mat, dtype, results.crc))
        if results.crcmatrix == 0:
            results.crcmatrix = retval & 0xFFFF
    else:
        retval = data

    results.crc = crcu16(retval, results.crc)
    retval &= 0x007F
    info.data16 = _s16((data & 0xFF00) | 0x0080 | retval)
    return retval


def cmp_complex(a: ListData, b: ListData, results: Optional[CoreResults]) -> int:
    """Compare two cells by their computed values."""
    return calc_func(a, results) - calc_func(b, results)


def cmp_idx(a: ListData, b: ListData, results: Optional[CoreResults]) -> int:
    """Compare two cells by index; without results, also rebuild their data words."""
    if results is None:
        a.data16 = _s16((a.data16 & 0xFF00) | (0x00FF & (a.data16 >> 8)))
        b.data16 = _s16((b.data16 & 0xFF00) | (0x00FF & (b.data16 >> 8)))
    return a.idx - b.idx


def list_find(head: Optional[ListNode], info: ListData) -> Optional[ListNode]:
    """Find a cell by index when ``info.idx >= 0``, otherwise by the low data byte."""
    node = head
    if info.idx >= 0:
        while node is not None and node.info.idx != info.idx:
            node = node.next
    else:
        while node is not None and (node.info.data16 & 0xFF) != info.data16:
            node = node.next
    return node


def list_reverse(head: Optional[ListNode]) -> Optional[ListNode]:
    """Reverse the list in place and return its new head."""
    reversed_head: Optional[ListNode] = None
    while head is not None:
        following = head.next
        head.next = reversed_head
        reversed_head = head
        head = following
    return reversed_head


def list_remove(item: ListNode) -> ListNode:
    """Unlink the cell after ``item`` after swapping their payloads; return the unlinked cell."""
    removed = item.next
    if removed is None:
        raise ValueError("cannot remove past the end of the list")
    item.info, removed.info = removed.info, item.info
    item.next = removed.next
    removed.next = None
    return removed


def list_undo_remove(removed: ListNode, modified: ListNode) -> ListNode:
    """Reverse a :func:`list_remove`, relinking ``removed`` after ``modified``."""
    removed.info, modified.info = modified.info, removed.info
    removed.next = modified.next
    modified.next = removed
    return removed


def list_mergesort(head: Optional[ListNode], cmp: Comparator,
                   results: Optional[CoreResults]) -> Optional[ListNode]:
    """Sort the list with an iterative bottom-up merge sort; return the new head."""
    if head is None:
        return None
    insize = 1
    while True:
        p: Optional[ListNode] = head
        head = None
        tail: Optional[ListNode] = None
        nmerges = 0
        while p is not None:
            nmerges += 1
            q: Optional[ListNode] = p
            psize = 0
            for _ in range(insize):
                psize += 1
                q = q.next
                if q is None:
                    break
            qsize = insize
            while psize > 0 or (qsize > 0 and q is not None):
                if psize == 0:
                    e, q = q, q.next
                    qsize -= 1
                elif qsize == 0 or q is None:
                    e, p = p, p.next
                    psize -= 1
                elif cmp(p.info, q.info, results) <= 0:
                    e, p = p, p.next
                    psize -= 1
                else:
                    e, q = q, q.next
                    qsize -= 1
                if tail is not None:
                    tail.next = e
                else:
                    head = e
                tail = e
            p = q
        tail.next = None
        if nmerges <= 1:
            return head
        insize *= 2


def list_init(blksize: int, seed: int) -> ListNode:
    """Build the benchmark list that fits in ``blksize`` bytes, ordered by index."""
    size = blksize // _ITEM_BYTES - 2
    if size < 3:
        raise ValueError("block too small to hold a list")
    capacity = size - 2

    head = ListNode(ListData(data16=_s16(0x8080), idx=0x0000))
    inserted = 0

    def insert(data16: int, idx: int) -> None:
        nonlocal inserted
        if inserted >= capacity:
            return
        head.next = ListNode(ListData(data16=data16, idx=idx), head.next)
        inserted += 1

    insert(_s16(0xFFFF), 0x7FFF)
    for i in range(size):
        datpat = (seed ^ i) & 0xF
        dat = (datpat << 3) | (i & 0x7)
        insert(_s16((dat << 8) | dat), 0x7FFF)

    finder = head.next
    i = 1
    while finder.next is not None:
        if i < size // 5:
            finder.info.idx = i
            i += 1
        else:
            pat = (i ^ seed) & 0xFFFF
            i += 1
            finder.info.idx = 0x3FFF & (((i & 0x07) << 8) | pat)
        finder = finder.next

    return list_mergesort(head, cmp_idx, None)


def bench_list(results: CoreResults, finder_idx: int) -> int:
    """Run the list benchmark once and return its 16-bit CRC.

    The list ends up in its original order.
    """
    if results.list is None:
        raise ValueError("list has not been initialised")
    retval = 0
    found = 0
    missed = 0
    head = results.list
    info = ListData(idx=finder_idx)

    for i in range(results.seed3):
        info.data16 = i & 0xFF
        this_find = list_find(head, info)
        head = list_reverse(head)
        if this_find is None:
            missed += 1
            retval += (head.next.info.data16 >> 8) & 1
        else:
            found += 1
            if this_find.info.data16 & 0x1:
                retval += (this_find.info.data16 >> 9) & 1
            if this_find.next is not None:
                moved = this_find.next
                this_find.next = moved.next
                moved.next = head.next
                head.next = moved
        if info.idx >= 0:
            info.idx = _s16(info.idx + 1)

    retval = (retval + found * 4 - missed) & 0xFFFF

    if finder_idx > 0:
        head = list_mergesort(head, cmp_complex, results)
    remover = list_remove(head.next)

    finder = list_find(head, info) or head.next
    while finder is not None:
        retval = crc16(head.info.data16, retval)
        finder = finder.next

    list_undo_remove(remover, head.next)
    head = list_mergesort(head, cmp_idx, None)

    finder = head.next
    while finder is not None:
        retval = crc16(head.info.data16, retval)
        finder = finder.next
    return retval