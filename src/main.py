import sys
import os
import argparse
import subprocess

# Add src to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from chain_sim.simulator import ChainSimulator
from blocklayer.ledger import Ledger
from core.exceptions import BlockLedgerError

def run_simulator(config_path, output_file, chain_path=None):
    """Build, tamper (if configured) and audit a chain; optionally save it."""
    sim = ChainSimulator(config_path=config_path, output_file=output_file)
    sim.run()
    if chain_path:
        sim.ledger.save(chain_path)
        print(f"Ledger saved to {chain_path}", file=sys.stderr)
    return 0

def run_audit(chain_path, output_file):
    """Validate every block of a saved ledger and print its payload."""
    ledger = Ledger.load(chain_path)
    ok = True
    for height in sorted(ledger.blocks):
        block = ledger.blocks[height]
        valid = block.validate()
        ok = ok and valid
        try:
            payload = block.get_payload()
        except BlockLedgerError as e:
            payload = f"<undecodable: {e}>"
        output_file.write(f"height={height} valid={valid} payload={payload}\n")
    return 0 if ok else 1

def run_tests():
    """Run all pytest tests."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"],
        cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        capture_output=False
    )
    return result.returncode

def run_determinism_check():
    """Run determinism check script."""
    script_path = os.path.join(os.path.dirname(__file__), "determinism_test.py")
    result = subprocess.run(
        [sys.executable, script_path],
        cwd=os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        capture_output=False
    )
    return result.returncode

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Block ledger - Simulator, Audit, Tests, and Determinism Check",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python src/main.py --mode simulator                            # Build and audit the default chain
  python src/main.py --mode simulator --chain chain.json         # ...and save it
  python src/main.py --mode audit --chain chain.json             # Validate a saved chain
  python src/main.py --mode test                                 # Run all tests
  python src/main.py --mode determinism                          # Compare two simulator runs
        """
    )

    parser.add_argument(
        "--mode",
        type=str,
        choices=["simulator", "audit", "test", "determinism"],
        default="simulator",
        help="Execution mode (default: simulator)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/default_config.yaml",
        help="Path to config file (for simulator mode)"
    )
    parser.add_argument(
        "--chain",
        type=str,
        default=None,
        help="Ledger JSON file (written by simulator, read by audit)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)"
    )

    args = parser.parse_args(argv)

    if args.mode == "test":
        print("Running all tests...\n")
        return run_tests()

    if args.mode == "determinism":
        return run_determinism_check()

    if args.mode == "audit" and not args.chain:
        parser.error("--chain is required in audit mode")

    output_file = sys.stdout
    if args.output:
        try:
            output_file = open(args.output, "w")
        except IOError as e:
            print(f"Error opening output file: {e}", file=sys.stderr)
            return 1

    try:
        if args.mode == "audit":
            return run_audit(args.chain, output_file)
        return run_simulator(args.config, output_file, args.chain)
    except BlockLedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if output_file is not sys.stdout:
            output_file.close()

if __name__ == "__main__":
    sys.exit(main())
