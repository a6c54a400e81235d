import sys
from pathlib import Path

def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: corrupt_one_byte.py <file> [offset]")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 22:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Default: flip a bit in the first byte of the "MLVLG" magic.
    # The header is 22 bytes; offsets past it land in the field table or data blocks.
    idx = int(sys.argv[2]) if len(sys.argv) == 3 else 0
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
