import os
import signal
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
VENV_BIN = ROOT / ".venv" / "bin"
UVICORN = str(VENV_BIN / "uvicorn")


def start_server(args: list[str], cwd: Path, env: dict) -> subprocess.Popen:
    # Start the server in its own process group for clean shutdowns
    return subprocess.Popen(
        args,
        cwd=str(cwd),
        env=env,
        preexec_fn=os.setsid,  # new process group (POSIX)
    )


def stop_server(proc: subprocess.Popen):
    if proc and proc.poll() is None:
        try:
            os.killpg(proc.pid, signal.SIGTERM)
        except ProcessLookupError:
            pass


def handle_exit(_sig, _frame):
    print("\nStopping server...")
    stop_server(backend_server)
    sys.exit(0)


signal.signal(signal.SIGINT, handle_exit)
signal.signal(signal.SIGTERM, handle_exit)


backend_cwd = ROOT / "backend"

env = dict(os.environ)
# Pass --mock to serve the bundled fixtures instead of calling StatsAPI
if "--mock" in sys.argv[1:]:
    env["MOCK_STATSAPI"] = "true"

# Backend: uvicorn diamond_score.main:app --port 8000 --reload
backend_server = start_server(
    [UVICORN, "diamond_score.main:app", "--port", "8000", "--reload"],
    backend_cwd,
    env,
)

try:
    ret = backend_server.wait()
    print(f"backend server exited with code {ret}.")
    sys.exit(ret)
except KeyboardInterrupt:
    handle_exit(None, None)
