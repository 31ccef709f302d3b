"""Heuristic extraction of emails, contacts, job postings and links from page text.

All functions here are pure. The contact and job-posting passes look at a
window of neighbouring lines, and a line may serve both as metadata for an
earlier job-title candidate and as a candidate of its own.
"""
from __future__ import annotations
import re
from urllib.parse import urlparse

from harvester.crawlers.base import Contact, JobPosting

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
NAME_RE = re.compile(r"([A-Z][a-z]+ [A-Z][a-z]+)")
PHONE_RE = re.compile(r"(\+?1?[-.\s]?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4})")
URL_RE = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+")
HEADING_RE = re.compile(r"^#+\s")

EMAIL_DENYLIST = ("example.com", "placeholder", "your-email", "test@", "noreply@", "no-reply@")
MIN_EMAIL_LENGTH = 6

CONTACT_TRIGGERS = ("contact", "recruiter", "hiring", "manager")
POSITION_KEYWORDS = ("manager", "director", "recruiter", "coordinator")
POSITION_WINDOW = 2

JOB_TITLE_KEYWORDS = ("engineer", "developer", "manager", "analyst", "specialist", "coordinator")
COMPANY_KEYWORDS = ("company", "corp", "inc")
LOCATION_KEYWORDS = ("location", "remote", "city")
JOB_LOOKAHEAD = 9
MAX_JOB_POSTINGS = 10

MAX_EXTERNAL_URLS = 10
_URL_TRAILING = ").],;:!?'"


def _is_junk_email(email: str) -> bool:
    if len(email) < MIN_EMAIL_LENGTH:
        return True
    # case-sensitive: "NoReply@corp.com" is kept
    return any(bad in email for bad in EMAIL_DENYLIST)


def extract_emails(text: str) -> list[str]:
    found: dict[str, None] = {}
    for match in EMAIL_RE.findall(text or ""):
        if _is_junk_email(match):
            continue
        found.setdefault(match, None)
    return list(found)


def _find_position(lines: list[str], index: int) -> str | None:
    start = max(0, index - POSITION_WINDOW)
    end = min(len(lines), index + POSITION_WINDOW + 1)
    for nearby in lines[start:end]:
        lower = nearby.lower()
        if any(k in lower for k in POSITION_KEYWORDS):
            return nearby.strip()
    return None


def extract_contacts(text: str) -> list[Contact]:
    lines = (text or "").split("\n")
    contacts: list[Contact] = []

    for i, line in enumerate(lines):
        lower = line.lower()
        if not any(k in lower for k in CONTACT_TRIGGERS):
            continue

        name_match = NAME_RE.search(line)
        email_match = EMAIL_RE.search(line)
        if not name_match and not email_match:
            continue
        phone_match = PHONE_RE.search(line)

        contacts.append(
            Contact(
                name=name_match.group(1) if name_match else "Unknown",
                email=email_match.group(0) if email_match else None,
                phone=phone_match.group(1) if phone_match else None,
                position=_find_position(lines, i),
            )
        )

    return contacts


def _is_job_title_candidate(line: str) -> bool:
    if HEADING_RE.match(line):
        return True
    stripped = line.strip()
    if not 10 < len(stripped) < 100:
        return False
    lower = stripped.lower()
    return any(k in lower for k in JOB_TITLE_KEYWORDS)


def _job_from_window(title: str, window: list[str]) -> JobPosting:
    posting = JobPosting(title=title)
    company_found = False
    description_found = False
    for nearby in window:
        lower = nearby.lower()
        if not company_found and any(k in lower for k in COMPANY_KEYWORDS):
            posting.company = nearby.strip()
            company_found = True
        if posting.location is None and any(k in lower for k in LOCATION_KEYWORDS):
            posting.location = nearby.strip()
        if not description_found and len(nearby) > 50:
            posting.description = nearby.strip()
            description_found = True
    return posting


def extract_job_postings(text: str) -> list[JobPosting]:
    lines = (text or "").split("\n")
    postings: list[JobPosting] = []

    for i, line in enumerate(lines):
        if len(postings) >= MAX_JOB_POSTINGS:
            break
        if not _is_job_title_candidate(line):
            continue

        title = HEADING_RE.sub("", line, count=1).strip()
        if not 5 < len(title) < 100:
            continue

        postings.append(_job_from_window(title, lines[i + 1 : i + 1 + JOB_LOOKAHEAD]))

    return postings


def extract_external_urls(text: str, base_url: str) -> list[str]:
    base_host = (urlparse(base_url).hostname or "").lower()
    seen: dict[str, None] = {}

    for raw in URL_RE.findall(text or ""):
        url = raw.rstrip(_URL_TRAILING)
        if "javascript:" in url or "mailto:" in url or "#" in url:
            continue
        try:
            host = (urlparse(url).hostname or "").lower()
        except ValueError:
            continue
        if not host or host == base_host:
            continue
        seen.setdefault(url, None)
        if len(seen) >= MAX_EXTERNAL_URLS:
            break

    return list(seen)
