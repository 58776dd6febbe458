"""
robots.txt rewriting: keep every rule, replace the Sitemap directives.
"""

from __future__ import annotations

SAMPLE_ROBOTS_LINES = ["User-agent: *", "Allow: /"]


def line_terminator(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def update_robots_content(existing: str | None, sitemap_full_url: str) -> str:
    if existing is None:
        return "\n".join(SAMPLE_ROBOTS_LINES) + "\n" + f"Sitemap: {sitemap_full_url}"

    eol = line_terminator(existing)
    kept: list[str] = []
    segments = existing.split("\n")
    raw_lines = [segment + "\n" for segment in segments[:-1]]
    if segments[-1]:
        raw_lines.append(segments[-1])
    for raw_line in raw_lines:
        # Exact, case-sensitive prefix: "sitemap:" lines are kept.
        if raw_line[:8] == "Sitemap:":
            continue
        kept.append(raw_line)
    if kept and not kept[-1].endswith("\n"):
        kept[-1] = kept[-1].rstrip("\r") + eol
    return "".join(kept) + f"Sitemap: {sitemap_full_url}"
