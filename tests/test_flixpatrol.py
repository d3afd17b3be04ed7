from trending.scrapers.flixpatrol import (
    parse,
    parse_points,
    platform_label,
    year_from_url,
)


def test_parse_sample_page(flixpatrol_html):
    entries = parse(flixpatrol_html, today="2024-05-01")

    assert entries == [
        {
            "rank": 1,
            "title": "The Gray Man (2022)",
            "isOriginal": True,
            "points": 1000,
            "platform": "netflix",
            "date": "2024-05-01",
        },
        {
            "rank": 2,
            "title": "Purple Hearts",
            "isOriginal": False,
            "points": 876,
            "platform": "netflix",
            "date": "2024-05-01",
        },
        {
            "rank": 1,
            "title": "The Terminal List (2022)",
            "isOriginal": False,
            "points": None,
            "platform": "amazon prime",
            "date": "2024-05-01",
        },
        {
            "rank": 1,
            "title": "",
            "isOriginal": False,
            "points": None,
            "platform": "apple tv",
            "date": "2024-05-01",
        },
    ]


def test_parse_takes_two_rows_per_service(flixpatrol_html):
    netflix = [e for e in parse(flixpatrol_html) if e["platform"] == "netflix"]
    assert [e["rank"] for e in netflix] == [1, 2]


def test_parse_empty_page():
    assert parse("<html><body><p>maintenance</p></body></html>") == []


def test_parse_defaults_to_today(flixpatrol_html):
    entries = parse(flixpatrol_html)
    assert len(entries[0]["date"]) == 10


def test_platform_label():
    assert platform_label("netflix-1") == "netflix"
    assert platform_label("hbo-1") == "hbo"
    assert platform_label("amazon-prime-1") == "amazon prime"
    assert platform_label("apple-tv-1") == "apple tv"


def test_year_from_url():
    assert year_from_url("/title/dune-2021/") == "2021"
    assert year_from_url("/title/dune-2021") == "2021"
    assert year_from_url("/title/blade-runner-2049-sequel/") == ""
    assert year_from_url("") == ""


def test_parse_points_leading_integer():
    assert parse_points("1000") == 1000
    assert parse_points("42 pts") == 42
    assert parse_points("") is None
    assert parse_points("-") is None


def test_parse_table_without_tbody():
    html = (
        '<div id="netflix-1"><table>'
        '<tr><td>1.</td><td><a href="/title/x-2020/"><div>X</div></a></td><td>10</td></tr>'
        '<tr><td>2.</td><td><a href="/title/y/"><div>Y</div></a></td><td>7</td></tr>'
        "</table></div>"
    )
    entries = parse(html, today="2024-05-01")

    assert [(e["rank"], e["title"], e["points"]) for e in entries] == [
        (1, "X (2020)", 10),
        (2, "Y", 7),
    ]
