import asyncio

from folio.document import PageDocument
from folio.pages.blog import BlogPageController
from folio.services.markdown_pipeline import MarkdownContentPipeline
from folio.services.metadata_injector import MetadataInjector
from folio.services.post_renderer import PostRenderer
from tests.conftest import FailingRepo, FakeRepo, FakeStaticClient, sample_posts


def make_controller(repo=None, document=None, debounce_seconds=0.01):
    renderer = PostRenderer(MarkdownContentPipeline(FakeStaticClient({})), MetadataInjector())
    return BlogPageController(
        document or PageDocument.from_template("blog.html"),
        repo or FakeRepo(sample_posts()),
        renderer,
        debounce_seconds=debounce_seconds,
    )


def card_ids(controller):
    return [
        card["data-post-id"]
        for card in controller.document.select("#blog-posts .post-card")
    ]


def style_of(controller, element_id):
    return controller.document.get_element_by_id(element_id)["style"]


def test_initialize_renders_all_cards_and_filters():
    controller = make_controller()

    asyncio.run(controller.initialize())

    assert card_ids(controller) == ["a1", "a2", "a3"]
    buttons = controller.document.select(".filter-btn")
    assert [b["data-category"] for b in buttons] == ["all", "web-security", "network", "process"]
    assert "active" in buttons[0]["class"]
    assert "display: none" in style_of(controller, "no-posts")


def test_initialize_with_category_and_search():
    controller = make_controller()

    asyncio.run(controller.initialize(category="Web Security", search_term="threat"))

    assert card_ids(controller) == ["a3"]
    assert controller.document.get_element_by_id("search-input")["value"] == "threat"
    active = controller.document.select(".filter-btn.active")
    assert [b["data-category"] for b in active] == ["web-security"]


def test_select_category_recomputes_from_full_index():
    controller = make_controller()
    asyncio.run(controller.initialize())

    controller.perform_search("fire")
    assert card_ids(controller) == ["a2"]

    controller.select_category("web-security")
    assert controller.filtered_posts == []

    controller.perform_search("")
    assert card_ids(controller) == ["a1", "a3"]

    controller.select_category("all")
    assert card_ids(controller) == ["a1", "a2", "a3"]
    assert len(controller.all_posts) == 3


def test_empty_result_shows_no_posts_placeholder():
    controller = make_controller()
    asyncio.run(controller.initialize())

    controller.perform_search("quantum")

    assert card_ids(controller) == []
    assert "display: none" in style_of(controller, "blog-posts")
    assert "display: block" in style_of(controller, "no-posts")

    controller.perform_search("")
    assert "display: grid" in style_of(controller, "blog-posts")
    assert "display: none" in style_of(controller, "no-posts")


def test_debounced_search_only_applies_settled_value():
    controller = make_controller(debounce_seconds=0.05)
    pushed = []

    async def record(posts):
        pushed.append((controller.search_term, [p.id for p in posts]))

    controller.on_results = record

    async def scenario():
        await controller.initialize()
        for value in ["f", "fi", "fir", "fire"]:
            controller.search_input(value)
            await asyncio.sleep(0)
        return await controller.settle()

    result = asyncio.run(scenario())

    assert pushed == [("fire", ["a2"])]
    assert [p.id for p in result] == ["a2"]
    assert card_ids(controller) == ["a2"]


def test_load_error_shows_friendly_message():
    controller = make_controller(repo=FailingRepo())

    asyncio.run(controller.initialize())

    grid = controller.document.get_element_by_id("blog-posts")
    assert grid.get_text(strip=True) == "Unable to load posts at this time."
    assert "refused" not in controller.document.render()
    assert controller.loaded is False


def test_missing_grid_returns_early_without_fetching():
    repo = FakeRepo(sample_posts())
    controller = make_controller(repo=repo, document=PageDocument("<html><body></body></html>"))

    asyncio.run(controller.initialize())

    assert repo.load_calls == 0
    assert controller.all_posts == []


def test_page_without_filter_buttons_still_filters():
    document = PageDocument(
        '<html><body><div id="blog-posts"></div><div id="no-posts"></div></body></html>'
    )
    controller = make_controller(document=document)

    asyncio.run(controller.initialize(category="network"))

    assert card_ids(controller) == ["a2"]


def test_close_cancels_pending_search():
    controller = make_controller(debounce_seconds=0.05)
    pushed = []

    async def record(posts):
        pushed.append(posts)

    controller.on_results = record

    async def scenario():
        await controller.initialize()
        controller.search_input("fire")
        controller.close()
        await asyncio.sleep(0.1)
        return await controller.settle()

    assert asyncio.run(scenario()) is None
    assert pushed == []
    assert controller.search_term == ""


def test_grid_html_matches_rendered_cards():
    controller = make_controller()
    asyncio.run(controller.initialize(search_term="fire"))

    assert 'data-post-id="a2"' in controller.grid_html()
    assert 'data-post-id="a1"' not in controller.grid_html()
