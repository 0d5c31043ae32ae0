# pointclick

Building blocks for point-and-click adventure games. The package holds the
parts of such a game that do not depend on a screen: futures for actions that
finish later, a queue of commands run once per frame, a binary format for
packing game resources, sprite animations, costumes, dialog timing and the
verbs of the control pane.

## Install

```
pip install pointclick
pip install "pointclick[test]"   # with the test dependencies
```

Pillow is the only runtime dependency; it is used by `pointclick.image`.

## Modules

### `pointclick.future`

`Promise` is a `Future` completed by its producer with `complete()`,
`complete_with(value, error)`, `complete_with_value(value)`,
`complete_with_error(error)`, `complete_after(value, delay)` or
`break_promise()`. A promise can be completed only once; a second completion
raises `RuntimeError`. `wait(timeout)` returns the value or raises the error,
and raises `TimeoutError` if the timeout runs out first. A broken promise
fails with `BrokenPromiseError`.

`bind(other)` completes a promise with the outcome of another future.
`already_succeeded` and `already_failed` give futures that are complete from
the start. The combinators `continue_with`, `future_map`, `recover`,
`recover_with_value` and `ignore_error` run on background threads and return
new futures.

### `pointclick.command`

`Command` is the base of anything that changes the application; its
`execute(app, done)` completes the promise `done`. `CommandFunc` wraps a plain
function (its return value or exception completes the promise) and
`CommandAsyncFunc` wraps a function that returns a future.

`CommandQueue` is thread safe: `push(command)` queues a command and returns
its future, `push_sequence(first, *rest)` queues each command only after the
previous one has succeeded, and `execute(app)` runs everything queued so far.

### `pointclick.encoding`

The little-endian resource format. `ResourceEncoder(index, data)` writes the
file headers (`PCTK:IDX`, `PCTK:DAT` and the format version) and then, for
each `encode_costume`, `encode_image`, `encode_music`, `encode_script`,
`encode_sound` or `encode_sprite_sheet` call, a 16-byte `ResourceHeader`, the
body (gzip-compressed when `ResourceCompression.GZIP` is given) and an
`IndexEntry` with the resource's offset and size. Any object with a
`binary_encode(stream)` method returning the bytes written can be encoded.
`data_bytes_written()` gives the size of the data stream so far.

`ResourceFileLoader(path)` reads resources back from `<package>.idx` and
`<package>.dat` in `path`: `read_resource(package, resource_id, type)` returns
the decompressed body and `open_resource(...)` returns it as a binary stream.
Missing files, unknown ids, wrong types and bad data raise `ResourceError`.

`write_values`, `read_values`, `write_string` and `read_string` are the
low-level helpers behind the format.

### `pointclick.anim`

`Animation` is a looped sequence of `AnimationFrame`s (sheet column, row and
delay in seconds). `add_frames(delay, row, *columns)` and `with_flip(flip)`
build it; `tick(now)` advances it to a point in time and returns the frame to
show. It round-trips through `binary_encode` / `binary_decode`.

### `pointclick.costume`

`Costume` holds a sprite sheet and the animation for each action code.
`costume_idle`, `costume_speak` and `costume_walk` build the predefined codes
for a direction; custom actions use codes above 0x80. Because the sprite sheet
type is supplied by the caller, `Costume.binary_decode` takes a function that
reads the sheet from the stream.

### `pointclick.image`

`Image` wraps a Pillow image. `Image.from_file(path)` loads one,
`width` and `height` give its size, and it is encoded as a uint32 length
followed by PNG bytes.

### `pointclick.dialog`

`Color` and the EGA palette constants (`BLACK`, `CYAN`, `MAGENTA`, `YELLOW`,
...). `Dialog` is a line of text from an actor; a blank colour becomes
`DEFAULT_DIALOG_COLOR`. `duration()` is one second per ten letters, at least
two seconds, divided by the whole part of the speed. `begin()` starts the
timer and returns the future completed when it ends; `is_visible()` is true
until then.

### `pointclick.verbs`

`Verb` lists the twelve verbs of the control pane; `Verb.action()` gives the
script function name (`Verb.WALK_TO.action() == "walkto"`). `ControlPaneMode`
is `DISABLED`, `NORMAL` or `DIALOG`. `SentenceChoice` collects sentences with
`add`; `choose(index)` completes its future with an `IndexedSentence`, and
`abort()` breaks it.

## Example

```python
from pathlib import Path

from PIL import Image as PILImage

from pointclick.encoding import (
    ResourceCompression,
    ResourceEncoder,
    ResourceFileLoader,
    ResourceType,
)
from pointclick.future import Promise, future_map
from pointclick.image import Image

out = Path("build")
out.mkdir(exist_ok=True)
with open(out / "resources.idx", "wb") as idx, open(out / "resources.dat", "wb") as dat:
    encoder = ResourceEncoder(idx, dat)
    room = Image(PILImage.new("RGB", (320, 144)))
    encoder.encode_image("rooms/hall", room, ResourceCompression.GZIP)

loader = ResourceFileLoader(out)
with loader.open_resource("resources", "rooms/hall", ResourceType.IMAGE) as stream:
    image = Image.binary_decode(stream)
print(image.width, image.height)      # 320 144

promise = Promise()
doubled = future_map(promise, lambda value: value * 2)
promise.complete_with_value(21)
print(doubled.wait(1.0))              # 42
```

## What it does not do

The package opens no window, draws nothing, plays no sound and runs no game
scripts. There are no actors, rooms, walk boxes, cameras or mouse handling,
and no command-line tool for packing a directory of resources: resources are
packed by calling `ResourceEncoder` from your own code. Commands receive the
application object you pass to `CommandQueue.execute`; the package does not
provide one.

## Tests

```
pytest
```