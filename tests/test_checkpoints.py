from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from birthbuild.checkpoints import (
    STATE_ACTIVE,
    STATE_EMPTY,
    CheckpointStore,
    remove_page_section,
    reorder_page_sections,
    replace_page_section_content,
    restyle_pages,
)
from birthbuild.config import SiteSpec
from birthbuild.design.css_editor import CssVariables, extract_css_variables
from birthbuild.errors import CheckpointError, CheckpointNotFoundError, DesignError
from birthbuild.pipeline import GeneratedPage, generate_site
from birthbuild.render.pages import PAGE_GENERATORS
from birthbuild.sections import extract_section, get_section_names

SITE = "bloom-doula"


def _pages(marker: str = "v") -> list[GeneratedPage]:
    return [
        GeneratedPage(filename="index.html", html=f"<p>{marker} home</p>"),
        GeneratedPage(filename="about.html", html=f"<p>{marker} about</p>"),
    ]


def test_versions_are_contiguous_and_listed_newest_first(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)
    assert store.state(SITE) == STATE_EMPTY

    created = [store.create(SITE, _pages(str(n)), label=f"build {n}") for n in range(3)]

    assert [c.version for c in created] == [1, 2, 3]
    assert [c.version for c in store.list(SITE)] == [3, 2, 1]
    assert store.latest(SITE).id == created[-1].id
    assert store.state(SITE) == STATE_ACTIVE
    assert (tmp_path / SITE / "checkpoints" / "v0002.json").exists()


def test_checkpoint_round_trips_through_disk(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)
    created = store.create(SITE, _pages(), label="Initial build", llms_txt="# Bloom")

    loaded = CheckpointStore(tmp_path).get(SITE, created.id)

    assert loaded == created
    assert loaded.page("about.html").html == "<p>v about</p>"
    assert loaded.filenames == ["index.html", "about.html"]


def test_concurrent_creates_never_share_a_version(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda n: store.create(SITE, _pages(str(n))), range(8)))

    assert sorted(c.version for c in results) == list(range(1, 9))
    assert len({c.id for c in results}) == 8


def test_empty_page_set_is_rejected(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)

    with pytest.raises(CheckpointError):
        store.create(SITE, [])
    assert store.list(SITE) == []


def test_failed_generation_leaves_history_untouched(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = CheckpointStore(tmp_path)
    spec = SiteSpec(business_name="Bloom Doula", pages=["home", "about"])
    store.create_from_site(SITE, generate_site(spec), label="Initial build")

    def boom(*_args):
        raise RuntimeError("renderer exploded")

    monkeypatch.setitem(PAGE_GENERATORS, "about", boom)
    with pytest.raises(RuntimeError):
        store.create_from_site(SITE, generate_site(spec), label="Regenerated")

    assert [c.version for c in store.list(SITE)] == [1]


def test_lookup_errors(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)
    store.create(SITE, _pages())

    with pytest.raises(CheckpointNotFoundError):
        store.get(SITE, "nope")
    with pytest.raises(CheckpointNotFoundError):
        store.get_version(SITE, 9)
    with pytest.raises(CheckpointError):
        store.site_dir("../escape")
    assert store.latest("other-site") is None


def test_corrupt_checkpoint_file_raises(tmp_path: Path) -> None:
    store = CheckpointStore(tmp_path)
    store.create(SITE, _pages())
    (tmp_path / SITE / "checkpoints" / "v0001.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(CheckpointError):
        store.get_version(SITE, 1)


@pytest.fixture
def generated_store(tmp_path: Path, full_spec: SiteSpec) -> CheckpointStore:
    store = CheckpointStore(tmp_path)
    store.create_from_site(full_spec.id, generate_site(full_spec), label="Initial build")
    return store


def test_reorder_creates_new_checkpoint(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)

    edited = reorder_page_sections(generated_store, SITE, source.id, "index.html", ["cta", "hero"])

    assert edited.version == 2
    assert edited.label == "Reordered sections on index.html"
    assert get_section_names(edited.page("index.html").html)[:2] == ["cta", "hero"]
    assert edited.page("about.html") == source.page("about.html")
    assert edited.design_system == source.design_system
    assert generated_store.get_version(SITE, 1).page("index.html") == source.page("index.html")


def test_noop_edit_returns_source(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)
    current = get_section_names(source.page("index.html").html)

    same = reorder_page_sections(generated_store, SITE, source.id, "index.html", current)
    missing = remove_page_section(generated_store, SITE, source.id, "index.html", "gallery")

    assert same.id == source.id
    assert missing.id == source.id
    assert len(generated_store.list(SITE)) == 1


def test_remove_and_replace_sections(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)

    removed = remove_page_section(generated_store, SITE, source.id, "index.html", "testimonials")
    replaced = replace_page_section_content(
        generated_store, SITE, removed.id, "about.html", "philosophy", "<p>New words</p>", label="Copy edit"
    )

    assert "testimonials" not in get_section_names(removed.page("index.html").html)
    assert extract_section(replaced.page("about.html").html, "philosophy").content == "<p>New words</p>"
    assert replaced.label == "Copy edit"
    assert [c.version for c in generated_store.list(SITE)] == [3, 2, 1]


def test_edit_of_unknown_page_fails(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)

    with pytest.raises(CheckpointError):
        reorder_page_sections(generated_store, SITE, source.id, "blog.html", ["hero"])


def test_restyle_updates_every_page_and_design_system(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)

    restyled = restyle_pages(
        generated_store, SITE, source.id, CssVariables(primary="#112233", font_heading="Lora")
    )

    assert restyled.version == 2
    assert restyled.label == "Restyled pages (from v1)"
    assert restyled.filenames == source.filenames
    for page in restyled.pages:
        values = extract_css_variables(page.html)
        assert (values.primary, values.font_heading, values.font_body) == ("#112233", "Lora", "Inter")
        assert "family=Lora:wght@400;700&amp;family=Inter" in page.html
    assert "--colour-primary: #112233;" in restyled.design_system.css
    assert restyled.design_system.head_fonts_url.startswith(
        "https://fonts.googleapis.com/css2?family=Lora:wght@400;700&family=Inter"
    )
    assert restyled.design_system.nav_html == source.design_system.nav_html
    assert restyled.llms_txt == source.llms_txt
    assert generated_store.get_version(SITE, 1) == source


def test_restyle_to_current_values_creates_nothing(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)
    current = extract_css_variables(source.pages[0].html)

    same = restyle_pages(
        generated_store, SITE, source.id, CssVariables(primary=current.primary, font_body=current.font_body)
    )

    assert same.id == source.id
    assert len(generated_store.list(SITE)) == 1


def test_restyle_with_invalid_colour_stores_nothing(generated_store: CheckpointStore) -> None:
    source = generated_store.latest(SITE)

    with pytest.raises(DesignError):
        restyle_pages(generated_store, SITE, source.id, CssVariables(cta="url(javascript:x)"))

    assert len(generated_store.list(SITE)) == 1
