"""Output formatting utilities for CLI commands."""


def format_elapsed(seconds: float) -> str:
    """Format a duration as '1m 05.3s' or '4.2s'."""
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {secs:04.1f}s"
    return f"{secs:.1f}s"


def format_export_summary(stats, destination: str, page_limit: int | None = None) -> str:
    """Format the export summary for display."""
    output = ["\n--- Export Summary ---"]
    output.append(f"Destination: {destination}")
    if page_limit:
        output.append(f"Page Limit: {page_limit}")
    output.append(f"Pages Fetched: {stats.pages_fetched}")
    output.append(f"Total Cards Exported: {stats.total_cards}")
    output.append(f"Duplicates Skipped: {stats.duplicates}")
    output.append(f"Elapsed Time: {format_elapsed(stats.elapsed_seconds)}")
    return "\n".join(output)


def format_config(config: dict) -> str:
    """Format configuration values for display."""
    output = ["\n--- Current Configuration ---"]
    for key, value in config.items():
        output.append(f"{key}: {value}")
    return "\n".join(output)
