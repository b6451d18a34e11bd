"""Unit tests for per-section field extractors."""

import pytest

from resume_chat.services.field_extractors import (
    extract_education,
    extract_experience,
    extract_lines,
    extract_objective,
    extract_projects,
    extract_skills,
)


@pytest.mark.unit
class TestExtractSkills:
    def test_comma_separated(self) -> None:
        assert extract_skills(["Python, Go, SQL"]) == ["Python", "Go", "SQL"]

    def test_mixed_delimiters_and_markers(self) -> None:
        skills = extract_skills(["• Python | Docker", "- Kubernetes\tAWS"])
        assert skills == ["Python", "Docker", "Kubernetes", "AWS"]

    def test_duplicates_removed_in_first_seen_order(self) -> None:
        assert extract_skills(["Python, Go, Python, SQL, Go"]) == ["Python", "Go", "SQL"]

    def test_stop_words_dropped(self) -> None:
        assert extract_skills(["Python, the, Go, with, SQL"]) == ["Python", "Go", "SQL"]

    def test_sparse_line_puts_technologies_first(self) -> None:
        assert extract_skills(["Leadership | Python"]) == ["Python", "Leadership"]

    def test_empty(self) -> None:
        assert extract_skills([]) == []

    @pytest.mark.parametrize(
        "line",
        [
            "Python, Go | SQL",
            "Python ,Go|  SQL",
            "  Python,Go|SQL  ",
            "Python\t,  Go |SQL",
        ],
    )
    def test_whitespace_around_delimiters_does_not_matter(self, line: str) -> None:
        assert extract_skills([line]) == ["Python", "Go", "SQL"]


@pytest.mark.unit
class TestExtractEducation:
    def test_institution_degree_and_year(self) -> None:
        entries = extract_education(["MIT", "B.S. in Computer Science", "2015 - 2019"])
        assert len(entries) == 1
        entry = entries[0]
        assert entry.institution == "MIT"
        assert entry.degree == "B.S."
        assert entry.field == "Computer Science"
        assert entry.year == "2015"
        assert entry.details == "2015 - 2019"

    def test_year_line_opens_entry_when_current_has_year(self) -> None:
        entries = extract_education(["MIT", "BS", "2015", "Stanford PhD 2020"])
        assert len(entries) == 2
        assert entries[0].year == "2015"
        assert entries[1].year == "2020"
        assert entries[1].details == "Stanford PhD 2020"

    def test_trailing_years_close_each_entry(self) -> None:
        entries = extract_education(["MIT", "BS", "2015", "Stanford", "PhD", "2020"])
        assert [(e.institution, e.degree, e.year) for e in entries] == [
            ("MIT", "BS", "2015"),
            ("Stanford", "PhD", "2020"),
        ]

    def test_leading_years_open_each_entry(self) -> None:
        entries = extract_education(["2015 - 2019", "MIT", "BS", "2019 - 2021", "Stanford", "PhD"])
        assert [(e.institution, e.degree, e.year) for e in entries] == [
            ("MIT", "BS", "2015"),
            ("Stanford", "PhD", "2019"),
        ]

    def test_leading_year_line(self) -> None:
        entries = extract_education(["2012 High School Diploma"])
        assert entries[0].year == "2012"
        assert entries[0].institution is None

    def test_empty(self) -> None:
        assert extract_education([]) == []


@pytest.mark.unit
class TestExtractExperience:
    def test_single_role(self) -> None:
        entries = extract_experience(["Acme Co", "Engineer", "2019 - Present", "- Built X", "- Shipped Y"])
        assert len(entries) == 1
        entry = entries[0]
        assert entry.company == "Acme Co"
        assert entry.position == "Engineer"
        assert entry.duration == "2019 - Present"
        assert entry.responsibilities == ["Built X", "Shipped Y"]

    def test_plain_line_after_bullets_opens_next_role(self) -> None:
        lines = [
            "Acme Co",
            "Engineer",
            "2019 - Present",
            "- Built X",
            "Globex",
            "Intern",
            "Jan 2017 - Dec 2018",
            "• Fixed Z",
        ]
        entries = extract_experience(lines)
        assert [e.company for e in entries] == ["Acme Co", "Globex"]
        assert entries[1].position == "Intern"
        assert entries[1].duration == "Jan 2017 - Dec 2018"
        assert entries[1].responsibilities == ["Fixed Z"]

    def test_second_date_line_opens_next_role(self) -> None:
        entries = extract_experience(["2019 - 2021", "Acme", "- x", "2017 - 2019"])
        assert len(entries) == 2
        assert entries[0].duration == "2019 - 2021"
        assert entries[0].company == "Acme"
        assert entries[1].duration == "2017 - 2019"

    def test_extra_lines_go_to_details(self) -> None:
        entries = extract_experience(["Acme", "Engineer", "Remote", "Platform team"])
        assert entries[0].details == "Remote Platform team"


@pytest.mark.unit
class TestExtractProjects:
    def test_title_description_and_technologies(self) -> None:
        lines = [
            "- Resume Chat",
            "A chat tool for resumes, built in a weekend",
            "Python, FastAPI, React",
        ]
        projects = extract_projects(lines)
        assert len(projects) == 1
        assert projects[0].name == "Resume Chat"
        assert projects[0].description == "A chat tool for resumes, built in a weekend"
        assert projects[0].technologies == ["Python", "FastAPI", "React"]

    def test_each_title_opens_a_project(self) -> None:
        projects = extract_projects(["1. Compiler", "2. Game Engine"])
        assert [p.name for p in projects] == ["Compiler", "Game Engine"]

    def test_fallback_to_bare_names(self) -> None:
        lines = [
            "Built a scheduling service, used by 40 teams",
            "2020, internal tooling for the data platform",
            "ACME, INTERNAL TOOLS",
            "ok, hi",
        ]
        projects = extract_projects(lines)
        assert [p.name for p in projects] == ["Built a scheduling service, used by 40 teams"]


@pytest.mark.unit
class TestSimpleExtractors:
    def test_lines_drop_blanks(self) -> None:
        assert extract_lines(["AWS Certified", "", "  ", "CKA"]) == ["AWS Certified", "CKA"]

    def test_objective_joins_lines(self) -> None:
        assert extract_objective(["Backend engineer.", "Loves Python."]) == (
            "Backend engineer.\nLoves Python."
        )
