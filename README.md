# slipqr

A library with two halves: decoding SLIP-framed, CRC-checked packets that
arrive over a serial line, and turning input data into the padded data
codewords and Reed-Solomon error correction codewords of a QR Code symbol.

## Serial side

- `slipqr.crc16.crc16(data, length=None, crc=0)` computes the table-driven
  CRC-16 (reflected, polynomial 0xA001) over the first `length` bytes,
  continuing from `crc`.
- `slipqr.byteorder` reverses the byte order of fixed-width integers:
  `swap_int16`, `swap_uint16`, `swap_uint32`. Values that do not fit raise
  `ValueError`.
- `slipqr.slip.SlipProtocol` decodes SLIP byte streams (END `0xC0`, ESC
  `0xDB`, escaped `0xDC`/`0xDD`). At each END the collected bytes are checked
  with `verify_msg`: a packet must be at least five bytes long and its last two
  bytes, low byte first, must equal the CRC-16 of the rest; the CRC is then
  removed. `decode_frame(data, buffer)` returns the list of verified payloads;
  an invalid packet clears the buffer. `slipqr.slip.Protocol` is the abstract
  base for other protocols.
- `slipqr.protocols.ProtocolManager` keeps protocols by name
  (`register`, `unregister`, `set_current`, `current`, `names`). SLIP is
  registered and selected when it is created. `handle_received(data)` decodes
  with the current protocol into a fresh buffer and returns the frames.
  `default_manager()` returns one shared manager.
- `slipqr.serial_link.SerialWorker` opens (`open(port, baud_rate, data_bits,
  stop_bits, parity)`), writes UTF-8 text to (`send`), reads from
  (`read_available`) and closes a port through pyserial. Stop bits are coded
  1/2/3 (one, two, one and a half), parity 0/2/3/4/5 (none, even, odd, space,
  mark); unsupported settings raise `ValueError`.
- `slipqr.serial_link.SerialController` runs a background thread that polls
  the worker for received bytes, passes them to the manager's current
  protocol, and rescans the available ports every second. Callbacks
  `on_open_changed`, `on_ports_changed` and `on_frames` report changes; the
  controller is a context manager and `close()` stops it.
- `slipqr.dbtable` holds named pages of `DBItem` records in a
  `DBTableManager`; `current_page_data()` returns the current page as plain
  mappings and `make_page1_data()` gives a sample page.

```python
from slipqr.crc16 import crc16
from slipqr.slip import SlipProtocol

payload = b"\x01\x02\x03"
crc = crc16(payload, len(payload), 0)
frame = b"\xc0" + payload + bytes([crc & 0xFF, crc >> 8]) + b"\xc0"

proto = SlipProtocol()
frames = proto.decode_frame(frame, bytearray())
assert frames == [payload]
```

## QR Code side

- `slipqr.qrspec` holds the symbol tables: `data_length`, `ecc_length`,
  `minimum_version`, `width`, `remainder`, `length_indicator`,
  `maximum_words`, `ecc_spec` (an `EccSpec` block layout), `version_pattern`,
  `format_info` and `new_frame`, which returns the initial frame with finder,
  timing, alignment, format and version areas placed. `Mode` and `ECLevel`
  are the enums used throughout.
- `slipqr.segments` validates (`check`), estimates and encodes data segments
  (`Entry`) into a `BitStream`.
- `slipqr.qrinput.QRInput` collects segments (`append`, `append_eci_header`,
  `insert_structured_append_header`, `set_fnc1_second`), chooses the smallest
  fitting version when the version is 0, and returns the padded codewords via
  `bit_stream()` or `byte_stream()`. Data too large for the symbol raises
  `DataTooLargeError`.
- `slipqr.rsecc.rs_encode(data, ecc_length)` computes 2 to 30 Reed-Solomon
  error correction codewords.
- `slipqr.structured.split_input_to_struct` spreads an input with a fixed
  version over up to 16 structured-append symbols (`QRInputStruct`).
- `slipqr.split.split_string` splits a string into numeric, alphanumeric,
  8-bit and (with `Mode.KANJI` as hint) Shift-JIS Kanji segments, optionally
  upper-casing it first.

```python
from slipqr.qrinput import QRInput
from slipqr.qrspec import ECLevel, Mode, ecc_spec
from slipqr.rsecc import rs_encode
from slipqr.split import split_string

qrinput = QRInput(0, ECLevel.M)
split_string(b"HELLO 12345", qrinput, Mode.BYTE, True)
data = qrinput.byte_stream()

spec = ecc_spec(qrinput.version, qrinput.level)
ecc = rs_encode(data[:spec.data_codes1], spec.ecc_codes)
```

## What it does not do

- There is no command-line program and no user interface; the serial side is
  a library to be driven from your own code.
- The QR Code side stops at codewords: it does not interleave blocks, place
  modules into the matrix, apply masks, or draw an image. Micro QR symbols are
  not supported, and an FNC1 first-position header (`set_fnc1_first`) cannot
  be encoded: building the bit stream with it set raises `ValueError`.

## Tests

```
pip install -e .[test]
pytest
```