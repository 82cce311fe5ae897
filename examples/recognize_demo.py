#!/usr/bin/env python3
"""
Interactive EasyVR Recognition Script.

Connects to a module, prints what it knows about itself, then listens for
built-in action words or for the custom commands of one group.

Usage:
    python examples/recognize_demo.py [PORT] [GROUP]
"""

import sys
import time
import logging
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from easyvr import EasyVR, ErrorCode, Knob, Language, ModuleId, Wordset

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)


def describe_module(vr):
    module_id = vr.get_id()
    name = module_id.name if isinstance(module_id, ModuleId) else f"unknown ({module_id})"
    print(f"Module: {name}")

    mask = vr.get_group_mask()
    if mask is not None:
        groups = [g for g in range(17) if mask & (1 << g)]
        print(f"Groups with commands: {groups or 'none'}")
        for group in groups:
            for index in range(vr.get_command_count(group)):
                data = vr.dump_command(group, index)
                if data:
                    print(f"  [{group}:{index}] {data.name or '<no label>'} "
                          f"(trained {data.training}x)")

    table = vr.dump_sound_table()
    if table:
        print(f"Sound table: {table.name or '<none>'} ({table.count} sounds)")


def wait_for_result(vr, seconds):
    deadline = time.time() + seconds
    while time.time() < deadline:
        if vr.has_finished():
            return True
        time.sleep(0.05)
    vr.stop()
    return False


def main():
    port = sys.argv[1] if len(sys.argv) > 1 else None
    group = int(sys.argv[2]) if len(sys.argv) > 2 else None

    vr = EasyVR(port=port)
    print("Connecting (auto-detect)..." if port is None else f"Connecting to {port}...")
    if not vr.connect():
        print("Failed to connect! Is the adapter plugged in?")
        return

    try:
        if not vr.detect():
            print("No EasyVR module answered.")
            return

        vr.set_language(Language.ENGLISH)
        vr.set_knob(Knob.TYPICAL)
        vr.set_timeout(5)
        describe_module(vr)

        print("\nListening (Ctrl+C to stop)...")
        while True:
            if group is None:
                vr.recognize_word(Wordset.ACTION_SET)
            else:
                vr.recognize_command(group)

            if not wait_for_result(vr, 10.0):
                print("No answer from the module, retrying")
                continue

            if vr.get_word() >= 0:
                print(f"Built-in word #{vr.get_word()}")
            elif vr.get_command() >= 0:
                print(f"Command #{vr.get_command()} of group {vr.last_group}")
            elif vr.is_timeout():
                print("Timed out")
            elif vr.get_error() >= 0:
                error = vr.get_error()
                try:
                    print(f"Error: {ErrorCode(error).name}")
                except ValueError:
                    print(f"Error: {error:#04x}")

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        if vr.pending_operation:
            vr.stop()
    finally:
        print("\nDisconnecting...")
        vr.disconnect()
        print("Done.")


if __name__ == "__main__":
    main()
