# jpegl

Lossless JPEG (process 14, `SOF3`) in pure Python: JFIF, frame and scan
headers, Huffman table construction and DHT segment I/O, comment segments,
the seven lossless predictors, and a decoder for streams whose scans each
hold one component (non-interleaved).

The package has no runtime dependencies.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Decoding

`jpegl.decoder.decode` takes the bytes of a lossless JPEG stream and returns
an `ImageData` holding one pixel plane (a `bytearray`) per component.
`ImageData.get_image()` joins the planes and returns
`(data, width, height, depth, ppi)`:

```python
from jpegl.decoder import decode

with open("print.jpl", "rb") as fh:
    image = decode(fh.read())

data, width, height, depth, ppi = image.get_image()
```

The stream must start with `SOI` followed by an `APP0` (JFIF) segment; the
resolution is taken from it by `jpegl.headers.get_ppi` (-1 when the JFIF
density units are unknown). Huffman tables (`DHT`) and comments (`COM`) may
appear before the frame header and before each scan. When a scan has a point
transform, the decoded samples are shifted back up by it.

Malformed input, undefined or redefined Huffman tables, interleaved scans and
similar problems raise `jpegl.bytestream.JpeglError`, a subclass of
`ValueError`.

## Building blocks

- `jpegl.bytestream` – `ByteReader` (`read_byte`, `read_ushort`,
  `read_bytes`, `peek`, `remaining`) and `ByteWriter` (`write_byte`,
  `write_ushort`, `write_bytes`, `getvalue`, optional size `limit`):
  big-endian access to memory buffers with bounds checks.
- `jpegl.markers` – the `Marker` codes and `read_marker`, which reads a
  marker and checks it against a `MarkerExpectation`.
- `jpegl.headers` – `JfifHeader`, `FrameHeader` and `ScanHeader` with their
  `read_*`, `write_*` and `setup_*` functions, and `get_ppi`.
- `jpegl.huffsizes` – code sizes from category frequencies
  (`find_huff_sizes`, `find_least_freq`, `find_num_huff_sizes`,
  `sort_huffbits`, `sort_code_sizes`).
- `jpegl.huffcodes` – `HuffCode` and canonical code construction
  (`build_huffsizes`, `build_huffcodes`, `build_huffcode_table`,
  `gen_decode_table`).
- `jpegl.huffio` – `RawHuffmanTable`, `read_huffman_table` and
  `write_huffman_table`.
- `jpegl.hufftable` – `HuffmanTable`, `gen_huff_tables` (encoder tables
  from each table's `freq`) and `read_huffman_table_jpegl` (decoder tables
  from a DHT segment).
- `jpegl.image` – `ImageData`, `setup_nonintrlv_encode` (split a pixmap of
  depth 8 or 24 into component planes) and `setup_decode`.
- `jpegl.comments` – `read_comment`, `write_comment` and `add_comment`.
- `jpegl.tables` – `read_table`, dispatching DHT and COM segments.
- `jpegl.predictor` – `predict`, `categorize` and the `Predictor` enum.

Writing the start of a stream:

```python
from jpegl.bytestream import ByteWriter
from jpegl.headers import PPI_UNITS, setup_jfif_header, write_jfif_header
from jpegl.markers import Marker

writer = ByteWriter()
writer.write_ushort(Marker.SOI)
write_jfif_header(setup_jfif_header(PPI_UNITS, 500, 500), writer)
header_bytes = writer.getvalue()
```

Adding a comment to an encoded stream; it is placed after `SOI`, the JFIF
header if present and any comment segments already at the start:

```python
from jpegl.comments import add_comment

with open("print.jpl", "rb") as fh:
    data = fh.read()

annotated = add_comment(data, b"scanned at 500 ppi")
```

## What the package does not do

- It has no single function that encodes an image into a complete stream.
  The headers, Huffman tables, predictors and writers needed for encoding
  are here, but producing the entropy-coded scan data is left to the caller.
- The decoder rejects interleaved scans (more than one component per scan).
- It does not parse or generate structured attribute comments; comments are
  handled as plain bytes.
- There is no command-line tool and no file-level API; everything works on
  bytes in memory.