# xento

Parts of a small hobby kernel and its userland libraries as plain Python
that can be used and tested on any machine. Hardware is modelled as data:
allocators hand out integer addresses, the clock counts ticks you feed it,
and interrupt masks are kept in a table.

## What is inside

- `xento.json_parser`: `parse(text)` and `JsonParser(text).parse_value()`
  read one JSON value into `None`, `bool`, `int`, `float`, `str`, `list` or
  `JsonObject`. A `JsonObject` keeps its `(key, value)` pairs in document
  order, allows repeated keys and has `get(key, default)`. Integers must fit
  in a signed 64-bit range. Errors raise `JsonParseError` (a `ValueError`).
- `xento.json_serializer`: `dumps(value)` and `JsonSerializer(writer)`
  write values as text, with `", "` and `": "` as separators. Dicts and
  tuples are accepted as well; floats are written in plain decimal notation.
- `xento.png_types`: enumerations for bit depth, colour type, compression,
  filter method, filter type, interlace method and pixel type,
  `parse_chunk_type(data)` and `pixel_type_for(color, depth)`. Invalid values
  raise `PngError`.
- `xento.png_chunk`: `Chunk.read(data)` reads one chunk (the CRC is kept but
  not checked), `PngHeader.from_chunk(chunk)` decodes `IHDR`,
  `AncillaryChunks` holds palette, transparency and background data, and
  `transparency_from_chunk(chunk, pixel_type)` decodes `tRNS`.
- `xento.png_scanline`: `ScanlineIterator` yields `(r, g, b, a)` tuples for a
  defiltered scanline; 16-bit samples keep their high byte.
- `xento.png_scanlines`: `process(ancillary_chunks, pixel_type, png_header,
  scanline_data)` turns filtered scanlines into an RGBA `bytearray`, for both
  plain and Adam7 images; also `defilter_scanline`, `pass_dimensions` and
  `pass_coordinates`.
- `xento.allocator`: `Layout`, `align_up`, `Locked` (a value behind a mutex,
  used with `with locked.lock() as inner:`) and `DummyAllocator`.
- `xento.bump`, `xento.linked_list`, `xento.fixed_size_block`: a bump
  allocator, a first-fit free-list allocator (`free_regions()` shows its
  list) and a fixed-size-block allocator with a free-list fallback. When
  memory runs out they raise `MemoryError`.
- `xento.frames`: `BootInfoFrameAllocator` hands out 4 KiB frames from the
  usable `MemoryRegion`s of a memory map; `EmptyFrameAllocator` never does.
- `xento.task`: `Task` wraps a coroutine or generator; `SimpleExecutor`
  polls tasks round robin, `Executor` polls only woken tasks. A task that
  suspends may yield a callable, which is called with the task's `Waker`.
- `xento.keyboard`: `ScancodeQueue` is a bounded scancode FIFO
  (`add_scancode` returns `False` and logs a warning when full), and
  `ScancodeStream` is an async iterator over it that suspends while it is
  empty.
- `xento.rtc`: `decode_rtc(raw, register_b)` converts raw CMOS register
  values (BCD or binary, 12- or 24-hour) to an `Rtc` in the 2000s.
- `xento.clock`: `is_leap_year`, `days_before_year`, `days_before_month`,
  `rtc_timestamp`, `pit_commands(divider, channel)` and `Clock`, which counts
  timer ticks for `uptime()` and `realtime(rtc)`.
- `xento.interrupts`: `InterruptIndex` vectors and `IrqController`, which
  installs handlers, dispatches vectors to them and keeps both PIC mask
  registers (every line starts masked).
- `xento.renderer`: `Renderer(framebuffer, width, height)` keeps a
  premultiplied RGBA pixmap with `clear()` and `fill(color)`; `update()`
  copies it to the framebuffer with red and blue swapped.
- `xento.kernel`: `QemuExitCode` and `binary_to_text(binary)`.
- `xento.boot`: `create_disk_image(path)` and the `xento-boot` command.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Examples

    from xento.json_parser import parse
    from xento.json_serializer import dumps

    value = parse('{"foo": 1, "bar": true}')
    print(dumps(value))   # {"foo": 1, "bar": true}

    from xento.allocator import Layout
    from xento.bump import BumpAllocator

    heap = BumpAllocator()
    heap.init(0x1000, 4096)
    address = heap.alloc(Layout(size=64, align=16))   # 0x1000

## Building a boot image

`xento-boot` takes the path of a built kernel binary, runs the Cargo
`builder` command of the `bootloader` dependency to build a BIOS disk image
(`boot-bios-<name>.img`) beside it, and starts that image in
`qemu-system-x86_64`. With `--no-run` it only builds the image and prints
where it is:

    xento-boot path/to/kernel --no-run

It must be run inside the Cargo workspace of the kernel, with Cargo (or the
program named by the `CARGO` environment variable) and QEMU installed.

## What it does not do

- It is not a kernel and does not touch hardware: there is no page-table
  setup, no interrupt descriptor table, no port I/O and no real timer or RTC
  reads; callers supply ticks, register values and memory maps.
- There is no complete PNG file reader: chunks and headers are parsed, but
  inflating `IDAT` data is left to the caller, and `tRNS` transparency is
  decoded without being applied to pixels.
- The renderer only fills and presents a pixmap; it draws no text, shapes or
  images.