import subprocess
import os
import sys
import filecmp
import hashlib

def run_simulation(output_file, chain_file):
    """Runs the simulator and writes the event log to output_file."""
    print(f"Running simulation, outputting to {output_file}...")
    result = subprocess.run(
        [sys.executable, "src/main.py", "--mode", "simulator",
         "--output", output_file, "--chain", chain_file],
        stderr=subprocess.PIPE,
        text=True,
        cwd=os.getcwd()
    )
    if result.returncode != 0:
        print(f"Error running simulation: {result.stderr}")
        return False
    return True

def get_file_hash(filepath):
    """Calculates SHA256 hash of a file."""
    hasher = hashlib.sha256()
    with open(filepath, 'rb') as f:
        while chunk := f.read(4096):
            hasher.update(chunk)
    return hasher.hexdigest()

def main():
    log_dir = "logs"
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    runs = [
        (os.path.join(log_dir, "run_1.log"), os.path.join(log_dir, "chain_1.json")),
        (os.path.join(log_dir, "run_2.log"), os.path.join(log_dir, "chain_2.json")),
    ]
    report_file = os.path.join(log_dir, "run_compare.txt")

    for log_path, chain_path in runs:
        if not run_simulation(log_path, chain_path):
            return 1

    logs_match = filecmp.cmp(runs[0][0], runs[1][0], shallow=False)
    chains_match = filecmp.cmp(runs[0][1], runs[1][1], shallow=False)

    lines = [
        f"log 1:   {get_file_hash(runs[0][0])}",
        f"log 2:   {get_file_hash(runs[1][0])}",
        f"chain 1: {get_file_hash(runs[0][1])}",
        f"chain 2: {get_file_hash(runs[1][1])}",
        "RESULT: " + ("IDENTICAL" if logs_match and chains_match else "DIFFERENT"),
    ]
    with open(report_file, "w") as f:
        f.write("\n".join(lines) + "\n")
    print("\n".join(lines))

    return 0 if logs_match and chains_match else 1

if __name__ == "__main__":
    sys.exit(main())
