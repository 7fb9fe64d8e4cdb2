"""Result extraction from search fragments."""

from movcli.extract import extract, iter_results

ITEM = (
    '<a class="item" href="{href}"><span>{kind}</span><span>{year}</span>'
    '<span>{length}</span><div class="title">{title}</div></a>'
)


def item(href="/watch/x1", kind="Movie", year="2020", length="120m", title="Example"):
    return ITEM.format(href=href, kind=kind, year=year, length=length, title=title)


def test_single_item():
    results = extract(item())
    assert len(results) == 1
    r = results[0]
    assert r.title == "Example"
    assert r.target_path == "/watch/x1"
    for part in ("Movie", "2020", "120m"):
        assert part in r.subtitle


def test_subtitle_joins_metadata():
    assert extract(item())[0].subtitle == "Movie  2020  120m"


def test_empty_input():
    assert extract("") == []
    assert list(iter_results("")) == []


def test_preserves_source_order():
    html = item(href="/b", title="Bravo") + item(href="/a", title="Alpha") + item(href="/c", title="Charlie")
    assert [r.title for r in extract(html)] == ["Bravo", "Alpha", "Charlie"]


def test_keeps_duplicates():
    assert len(extract(item() + item())) == 2


def test_idempotent():
    html = item(href="/1", title="One") + item(href="/2", title="Two")
    assert extract(html) == extract(html)


def test_multiline_fragment():
    html = """
    <a class="item" href="/watch/alien-1979">
        <div class="meta">
            <span>Movie</span>
            <span>1979</span>
            <span>117m</span>
        </div>
        <div class="title">Alien</div>
    </a>
    <a class="item" href="/watch/aliens-1986">
        <span>Movie</span><span>1986</span><span>137m</span>
        <div class="title">Aliens</div>
    </a>
    """
    results = extract(html)
    assert [r.title for r in results] == ["Alien", "Aliens"]
    assert results[0].target_path == "/watch/alien-1979"
    assert results[1].subtitle == "Movie  1986  137m"


def test_ampersand_in_title():
    html = item(href="/1", title="Tom & Jerry") + item(href="/2", title="Fast &amp; Furious")
    assert [r.title for r in extract(html)] == ["Tom & Jerry", "Fast & Furious"]


def test_does_not_validate_field_semantics():
    r = extract(item(kind="TV", year="SS 3", length="EPS 10"))[0]
    assert r.subtitle == "TV  SS 3  EPS 10"


def test_block_missing_span_is_skipped():
    broken = (
        '<a class="item" href="/broken"><span>Movie</span><span>2020</span>'
        '<div class="title">Broken</div></a>'
    )
    results = extract(broken + item(href="/ok", title="Fine"))
    assert [(r.target_path, r.title) for r in results] == [("/ok", "Fine")]


def test_block_missing_title_is_skipped():
    broken = '<a class="item" href="/broken"><span>Movie</span><span>2020</span><span>90m</span></a>'
    results = extract(item(href="/first", title="First") + broken)
    assert [r.title for r in results] == ["First"]


def test_partial_markup_does_not_crash():
    assert extract('<a class="item" href="/x"><span>Movie') == []
    assert extract("<div>nothing here</div>") == []
