import logging
import pathlib
import sys

from .config import Config
from .disassemble import disassemble_file
from .print_chunks import printChunks
from .read_chunks import read_chunks


def save_frames(apng, out_dir: pathlib.Path):
    out_dir.mkdir(parents=True, exist_ok=True)
    if apng.cover_png is not None:
        (out_dir / 'cover.png').write_bytes(apng.cover_png)
    for i, frame in enumerate(apng.frames):
        (out_dir / f'frame_{i:03}.png').write_bytes(frame.png)
    print(f"Saved {len(apng.frames)} frames → {out_dir}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: python -m apng_disassembler FILE [OUT_DIR]", file=sys.stderr)
        return 2

    logging.basicConfig(level=Config.LOG_LEVEL)
    file_path = pathlib.Path(argv[0])

    with open(file_path, 'rb') as f:
        printChunks(read_chunks(f))

    apng = disassemble_file(file_path)
    print("\n")
    print(f"animated: {apng.is_animated}, canvas: {apng.width}x{apng.height}")
    if apng.is_animated:
        plays = 'infinite' if apng.num_plays == 0 else apng.num_plays
        print(f"declared frames: {apng.num_frames}, plays: {plays}")
    if apng.cover is not None:
        print(f"cover: {apng.cover.shape[1]}x{apng.cover.shape[0]}")
    elif apng.cover_error is not None:
        print(f"cover: not decodable ({apng.cover_error})")
    for i, frame in enumerate(apng.frames):
        print(f"frame {i}: {frame.width}x{frame.height} at ({frame.x_offset}, {frame.y_offset}), "
              f"delay={frame.delay:.3f}s, dispose={frame.dispose_op.name}, blend={frame.blend_op.name}, "
              f"{len(frame.png)} bytes")

    if len(argv) > 1:
        save_frames(apng, pathlib.Path(argv[1]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
