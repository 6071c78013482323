"""Memory layout, thread table and video settings of the N64 engine runtime."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

TICKRATE = 50
DELTATIME = 1.0 / TICKRATE

SEGMENTSTART_CODE = 0x80000400
SEGMENTSIZE_CODE = 0x00100000

RAMBANK_START = 0x80000000
RAMBANK_SIZE = 0x00100000
RAMBANKS = tuple(RAMBANK_START + RAMBANK_SIZE * index for index in range(8))

FRAMEBUFFER_DEPTH_BYTES = 2
FRAMEBUFFER_MAX_COUNT = 3

HEAP_SIZE = 0x080000
HEAP_AUDIO_START = RAMBANKS[2]
HEAP_AUDIO_SIZE = 0x040000

NUM_PI_MSGS = 32

RDP_FIFO_MIN_SIZE = 0x100
_U64_SIZE = 8


class TvMode(IntEnum):
    """Television standards the engine can target."""

    NTSC = 0
    PAL = 1
    MPAL = 2


class ThreadId(IntEnum):
    """Identifiers of the runtime's threads."""

    IDLE = 1
    MAIN = 2
    CONTROLLER = 3
    SCHEDULER = 4
    GRAPHICS = 5
    AUDIO = 6
    FAULT = 13
    USB = 14
    RDB = 15


_THREAD_PRIORITIES = {
    ThreadId.IDLE: 1,
    ThreadId.MAIN: 10,
    ThreadId.CONTROLLER: 15,
    ThreadId.SCHEDULER: 100,
    ThreadId.GRAPHICS: 20,
    ThreadId.AUDIO: 25,
    ThreadId.FAULT: 125,
    ThreadId.USB: 126,
    ThreadId.RDB: 124,
}

# Thread stacks in the order they are laid out, with their sizes.
_THREAD_STACKS = (
    ("boot", 0x2000),
    ("idle", 0x2000),
    ("main", 0x2000),
    ("controller", 0x2000),
    ("scheduler", 0x2000),
    ("graphics", 0x4000),
    ("audio", 0x2000),
)
_RDPFIFO_SIZE = 0x1000


def _check_tv_mode(tv_mode) -> TvMode:
    try:
        return TvMode(tv_mode)
    except ValueError:
        raise ValueError("Invalid TV mode chosen") from None


def target_framerate(tv_mode) -> int:
    """Frames per second the engine aims for in the given TV mode."""
    return 50 if _check_tv_mode(tv_mode) is TvMode.PAL else 60


def screen_size(tv_mode, high_resolution) -> tuple[int, int]:
    """Framebuffer width and height for the TV mode and resolution."""
    if _check_tv_mode(tv_mode) is TvMode.NTSC:
        return (640, 480) if high_resolution else (320, 240)
    return (640, 576) if high_resolution else (320, 288)


def thread_priority(thread_id) -> int:
    """Scheduling priority of a runtime thread."""
    try:
        return _THREAD_PRIORITIES[ThreadId(thread_id)]
    except ValueError:
        raise ValueError(f"unknown thread id: {thread_id!r}") from None


@dataclass(frozen=True)
class StackRegion:
    """A reserved stack or buffer region in RDRAM."""

    name: str
    start: int
    size: int
    alignment: int
    grows_down: bool = True

    @property
    def end(self) -> int:
        return self.start + self.size

    @property
    def real_start(self) -> int:
        """Address handed to the thread as its stack pointer."""
        if self.grows_down:
            return self.start + self.size // _U64_SIZE
        return self.start


@dataclass(frozen=True)
class MemoryMap:
    """The complete RDRAM layout for one TV mode."""

    tv_mode: TvMode
    stacks: tuple[StackRegion, ...]
    framebuffers_sd: tuple[int, int, int]
    framebuffers_hd: tuple[int, int, int]
    heap_start: int
    heap_size: int = HEAP_SIZE
    audio_heap_start: int = HEAP_AUDIO_START
    audio_heap_size: int = HEAP_AUDIO_SIZE

    @property
    def rdp_fifo_end(self) -> int:
        return self.stack("rdpfifo").end

    def framebuffer_size(self, high_resolution: bool) -> int:
        """Byte size reserved per framebuffer (width squared times depth)."""
        width, _ = screen_size(self.tv_mode, high_resolution)
        return width * width * FRAMEBUFFER_DEPTH_BYTES

    def stack(self, name: str) -> StackRegion:
        """Return the stack region with the given name."""
        for region in self.stacks:
            if region.name == name:
                return region
        raise KeyError(name)

    def validate(self, min_stack_size: int, dram_stack_size: int) -> None:
        """Raise ValueError if a stack is misaligned or too small."""
        for region in self.stacks:
            if region.start % region.alignment:
                raise ValueError(
                    f"The {region.name} stack must be "
                    f"{region.alignment}-byte aligned"
                )
        for region in self.stacks:
            if region.name == "dram":
                if region.size < dram_stack_size:
                    raise ValueError(
                        "The dram stack size must be larger than "
                        "SP_DRAM_STACK_SIZE8"
                    )
            elif region.name == "rdpfifo":
                if region.size < RDP_FIFO_MIN_SIZE:
                    raise ValueError(
                        "The RDP FIFO buffer size must be larger than 256 bytes"
                    )
            elif region.size < min_stack_size:
                raise ValueError(
                    f"The {region.name} stack size must be larger than "
                    "OS_MIN_STACKSIZE"
                )


def _framebuffer_addresses(banks, width: int, height: int) -> tuple[int, int, int]:
    frame_bytes = width * height * FRAMEBUFFER_DEPTH_BYTES
    return tuple(bank + RAMBANK_SIZE - frame_bytes for bank in banks)


def build_memory_map(tv_mode, dram_stack_size) -> MemoryMap:
    """Lay out stacks, framebuffers and heaps for a TV mode."""
    mode = _check_tv_mode(tv_mode)
    stacks = []
    address = RAMBANKS[1]
    for name, size in _THREAD_STACKS:
        stacks.append(StackRegion(name, address, size, alignment=8))
        address += size
    stacks.append(
        StackRegion("dram", address, dram_stack_size, alignment=16, grows_down=False)
    )
    address += dram_stack_size
    stacks.append(
        StackRegion("rdpfifo", address, _RDPFIFO_SIZE, alignment=16, grows_down=False)
    )

    sd_width, sd_height = screen_size(mode, False)
    hd_width, hd_height = screen_size(mode, True)
    framebuffers_sd = _framebuffer_addresses(RAMBANKS[1:4], sd_width, sd_height)
    framebuffers_hd = _framebuffer_addresses(RAMBANKS[5:8], hd_width, hd_height)

    return MemoryMap(
        tv_mode=mode,
        stacks=tuple(stacks),
        framebuffers_sd=framebuffers_sd,
        framebuffers_hd=framebuffers_hd,
        # One framebuffer pixel below the SD depth buffer.
        heap_start=framebuffers_sd[2] - FRAMEBUFFER_DEPTH_BYTES,
    )