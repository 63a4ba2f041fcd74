# ABOUTME: Verbose trace output gated behind the DEBUG env var
# ABOUTME: Prints to stdout so traces show up alongside container logs

from surfline2influx.config import Config


def debug_log(message: str, category: str = "DEBUG") -> None:
    """Print message tagged with category when DEBUG=true"""
    if Config.DEBUG:
        print(f"[{category}] {message}", flush=True)
