from __future__ import annotations

from harvester.crawlers.extractors import (
    EMAIL_DENYLIST,
    extract_contacts,
    extract_emails,
    extract_external_urls,
    extract_job_postings,
)


def test_extract_emails_filters_placeholders_and_dedupes():
    text = """
    Reach us at hr@acme.io or careers@globex.com.
    Also hr@acme.io again, and you@example.com, test@foo.com,
    noreply@jobs.com, no-reply@jobs.com, your-email@site.org, placeholder@x.com
    """
    emails = extract_emails(text)

    assert emails == ["hr@acme.io", "careers@globex.com"]
    assert not any(bad in e for e in emails for bad in EMAIL_DENYLIST)


def test_extract_emails_is_stable_for_same_input():
    text = "b@beta.dev a@alpha.dev b@beta.dev"
    assert extract_emails(text) == extract_emails(text) == ["b@beta.dev", "a@alpha.dev"]


def test_extract_emails_denylist_is_case_sensitive():
    emails = extract_emails("noreply@corp.com NoReply@corp.com Test@corp.com test@corp.com")

    assert emails == ["NoReply@corp.com", "Test@corp.com"]


def test_extract_emails_empty_text():
    assert extract_emails("") == []


def test_extract_contacts_name_email_and_position_on_same_line():
    contacts = extract_contacts("Jane Doe, Hiring Manager, jane@acme.io")

    assert len(contacts) == 1
    assert contacts[0].name == "Jane Doe"
    assert contacts[0].email == "jane@acme.io"
    assert contacts[0].phone is None
    assert contacts[0].position == "Jane Doe, Hiring Manager, jane@acme.io"


def test_extract_contacts_phone_and_unknown_name():
    contacts = extract_contacts("recruiter: bob@globex.com +1 555-123-4567")

    assert len(contacts) == 1
    assert contacts[0].name == "Unknown"
    assert contacts[0].email == "bob@globex.com"
    assert contacts[0].phone == "+1 555-123-4567"


def test_extract_contacts_position_from_nearby_line():
    text = "\n".join(
        [
            "Talent Team",
            "Please contact Mary Jones for details",
            "",
            "  Director of Engineering  ",
        ]
    )
    contacts = extract_contacts(text)

    assert len(contacts) == 1
    assert contacts[0].name == "Mary Jones"
    assert contacts[0].email is None
    assert contacts[0].position == "Director of Engineering"


def test_extract_contacts_position_outside_window_is_ignored():
    text = "\n".join(["please contact Mary Jones", "a", "b", "Director of Sales"])
    contacts = extract_contacts(text)

    assert len(contacts) == 1
    assert contacts[0].position is None


def test_extract_contacts_skips_lines_without_name_or_email():
    assert extract_contacts("contact us today\nhiring now!") == []


def test_extract_contacts_does_not_dedupe_across_lines():
    text = "Sam Lee, recruiter\nContact: sam@lee.dev, recruiter"
    contacts = extract_contacts(text)

    assert len(contacts) == 2
    assert contacts[0].name == "Sam Lee"
    assert contacts[1].email == "sam@lee.dev"


def test_extract_job_postings_reads_metadata_window():
    text = "\n".join(
        [
            "# Senior Data Analyst",
            "Globex Inc",
            "Initech Corp",
            "Location: Remote",
            "We are looking for a data analyst to join our analytics team and grow with us.",
        ]
    )
    postings = extract_job_postings(text)

    first = postings[0]
    assert first.title == "Senior Data Analyst"
    assert first.company == "Globex Inc"
    assert first.location == "Location: Remote"
    assert first.description.startswith("We are looking for a data analyst")
    assert first.type == "full-time"
    assert first.salary is None


def test_extract_job_postings_line_can_be_metadata_and_candidate():
    text = "\n".join(
        [
            "## Backend Engineer",
            "We are looking for a data analyst to join our analytics team and grow with us.",
        ]
    )
    postings = extract_job_postings(text)

    assert [p.title for p in postings] == [
        "Backend Engineer",
        "We are looking for a data analyst to join our analytics team and grow with us.",
    ]
    assert postings[0].description == postings[1].title
    assert postings[1].company == "Unknown Company"
    assert postings[1].description == "No description available"


def test_extract_job_postings_lookahead_is_nine_lines():
    lines = ["# Platform Engineer"] + ["x"] * 9 + ["Far Away Inc"]
    postings = extract_job_postings("\n".join(lines))

    assert len(postings) == 1
    assert postings[0].company == "Unknown Company"
    assert postings[0].location is None


def test_extract_job_postings_title_length_bounds():
    text = "\n".join(["# Dev", "#  " + "Engineer " * 12, "### Product Manager"])
    postings = extract_job_postings(text)

    assert [p.title for p in postings] == ["Product Manager"]
    assert all(5 < len(p.title) < 100 for p in postings)


def test_extract_job_postings_keyword_lines_need_length_between_10_and_100():
    text = "\n".join(["Engineer!!", "Staff Software Engineer", "plain line without keyword here"])
    postings = extract_job_postings(text)

    assert [p.title for p in postings] == ["Staff Software Engineer"]


def test_extract_job_postings_caps_at_ten():
    text = "\n".join(f"# Opening number {i}" for i in range(15))
    postings = extract_job_postings(text)

    assert len(postings) == 10
    assert postings[-1].title == "Opening number 9"


def test_extract_external_urls_filters_same_host_and_fragments():
    base = "https://www.indeed.com/jobs?q=Data%20Analyst"
    text = """
    [Apply](https://jobs.lever.co/acme/123)
    https://www.indeed.com/viewjob?jk=1
    https://acme.io/careers and again https://acme.io/careers.
    https://acme.io/about#team
    https://indeed.com/other
    """
    urls = extract_external_urls(text, base)

    assert urls == ["https://jobs.lever.co/acme/123", "https://acme.io/careers", "https://indeed.com/other"]


def test_extract_external_urls_caps_at_ten():
    base = "https://www.linkedin.com/jobs/search/?keywords=x"
    text = " ".join(f"https://site{i}.example.org/page" for i in range(15))
    text += " https://www.linkedin.com/in/someone"
    urls = extract_external_urls(text, base)

    assert len(urls) == 10
    assert urls[0] == "https://site0.example.org/page"
    assert all("linkedin.com" not in u for u in urls)


def test_extract_contacts_splits_on_newline_only():
    contacts = extract_contacts("Hiring desk\x0cJane Doe\r\nnothing here")

    assert len(contacts) == 1
    assert contacts[0].name == "Jane Doe"


def test_extract_job_postings_keeps_hash_that_is_not_a_heading_marker():
    postings = extract_job_postings("#1 Data Engineer role\n## #2 Platform Engineer")

    assert [p.title for p in postings] == ["#1 Data Engineer role", "#2 Platform Engineer"]
