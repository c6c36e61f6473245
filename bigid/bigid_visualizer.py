import sys

from bigid.bigid_generator import UINT64_MASK, decode


def visualize_binary(big_id, base_time=None, out=None):
    """Print a BigID in binary, split into its five fields.

    Args:
        big_id (int): The ID to visualize
        base_time (datetime, optional): Clock base used for the create time
        out (file, optional): Where to write, defaults to stdout
    """
    out = out or sys.stdout
    binary = bin(big_id & UINT64_MASK)[2:].zfill(64)

    # Split the binary string into its components
    version_bits = binary[0:2]
    reserved_bits = binary[2:6]
    timestamp_bits = binary[6:46]
    shard_bits = binary[46:54]
    sequence_bits = binary[54:]

    print(f"\n=== Binary Representation of ID: {big_id} ===\n", file=out)
    print(f"Version        (2): {version_bits}", file=out)
    print(f"Reserved       (4): {reserved_bits}", file=out)
    print(f"Timestamp     (40): {timestamp_bits}", file=out)
    print(f"Shard ID       (8): {shard_bits}", file=out)
    print(f"Sequence      (10): {sequence_bits}", file=out)

    print("\n=== Decimal Values ===\n", file=out)
    print(f"Version        : {int(version_bits, 2)}", file=out)
    print(f"Reserved       : {int(reserved_bits, 2)}", file=out)
    print(f"Timestamp      : {int(timestamp_bits, 2)}", file=out)
    print(f"Shard ID       : {int(shard_bits, 2)}", file=out)
    print(f"Sequence       : {int(sequence_bits, 2)}", file=out)

    print("\n=== Visual Bit Allocation ===\n", file=out)
    print("MSB                                                                 LSB", file=out)
    print("┌──┬────┬──────────────────────────────────────┬────────┬────────────┐", file=out)
    print("│V │Res │            Timestamp (40)            │Shard(8)│Sequence(10)│", file=out)
    print("└──┴────┴──────────────────────────────────────┴────────┴────────────┘", file=out)
    print(" ↑   ↑                    ↑                        ↑          ↑", file=out)
    print(" 62  58                   18                       10         0", file=out)

    parsed = decode(big_id, base_time) if base_time is not None else decode(big_id)
    print("\n=== Parsed ID ===\n", file=out)
    for key, value in parsed.model_dump().items():
        print(f"{key.replace('_', ' ').title()}: {value}", file=out)
