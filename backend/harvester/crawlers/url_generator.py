from __future__ import annotations
from urllib.parse import quote

TEMPLATES_VERSION = "2024.1"

# Order is significant: batches process sources in this order.
JOB_BOARD_TEMPLATES: tuple[tuple[str, str], ...] = (
    ("linkedin", "https://www.linkedin.com/jobs/search/?keywords={title}"),
    ("indeed", "https://www.indeed.com/jobs?q={title}"),
    ("glassdoor", "https://www.glassdoor.com/Job/jobs.htm?sc.keyword={title}"),
    ("stackoverflow", "https://stackoverflow.com/jobs?q={title}"),
    ("google", "https://jobs.google.com/search?q={title}"),
    ("ziprecruiter", "https://www.ziprecruiter.com/Jobs/{title}"),
    ("monster", "https://www.monster.com/jobs/search/?q={title}"),
    ("careerbuilder", "https://www.careerbuilder.com/jobs?keywords={title}"),
)

# Same unreserved set as JavaScript's encodeURIComponent.
_SAFE = "-_.!~*'()"


def encode_title(job_title: str) -> str:
    return quote(job_title, safe=_SAFE)


def generate_urls(job_title: str) -> list[str]:
    encoded = encode_title(job_title)
    return [template.format(title=encoded) for _board, template in JOB_BOARD_TEMPLATES]
