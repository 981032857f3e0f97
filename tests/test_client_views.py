"""
Admin views driven through ApiClient against the real Flask app.

The `api` fixture routes requests into the test client and records every
call, so these tests check both the view state and the requests sent.
"""

import io
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from newsdesk.client import (
    ApiClient, ApiError, AdminContext, ArticleFilters, ArticleForm, ArticleListView,
    CategoryManager, RichTextEditor, build_query, normalize_date,
)
from conftest import BASE_URL


def _article(api, **overrides):
    payload = {"title": "Cup final", "excerpt": "Late winner", "category": "Sports",
               "content": "<p>Report</p>"}
    payload.update(overrides)
    return api.post("/api/articles", json=payload)["article"]


def _failing_ctx(recorder):
    api = MagicMock(spec=ApiClient)
    api.get.side_effect = ApiError(500, "Internal Server Error")
    api.post.side_effect = ApiError(500, "Internal Server Error")
    api.put.side_effect = ApiError(500, "Internal Server Error")
    api.delete.side_effect = ApiError(500, "Internal Server Error")
    return AdminContext(api, navigate=recorder.navigate, sleep=recorder.sleep)


# ---------------------------------------------------------------------------
# ApiClient
# ---------------------------------------------------------------------------

def test_api_client_raises_with_server_message(api):
    with pytest.raises(ApiError) as excinfo:
        api.get("/api/articles/missing")
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Article not found"


def test_api_client_login_rejected(app, http):
    client = ApiClient(BASE_URL, session=http)
    assert client.login("nobody@example.com", "wrong") is False
    with pytest.raises(ApiError) as excinfo:
        client.get("/api/categories")
    assert excinfo.value.status_code == 401


# ---------------------------------------------------------------------------
# CategoryManager
# ---------------------------------------------------------------------------

def test_category_manager_add_rename_delete(ctx, http):
    manager = CategoryManager(ctx)
    manager.mount()
    assert manager.categories == []

    manager.new_name = "Sport"
    manager.add()
    assert manager.new_name == ""
    assert [c["name"] for c in manager.categories] == ["Sport"]

    category_id = manager.categories[0]["id"]
    manager.start_edit(category_id, "Sport")
    manager.edit_buffer = "Sports"
    manager.save(category_id)
    assert manager.editing_id is None
    assert manager.categories == [{"id": category_id, "name": "Sports"}]

    manager.delete(category_id)
    assert manager.categories == []

    # every change is followed by a refetch
    assert len(http.calls_to("GET", "/api/categories")) == 4


def test_category_manager_editing_one_row_at_a_time(ctx):
    manager = CategoryManager(ctx)
    manager.start_edit("a", "Arts")
    manager.edit_buffer = "Art"
    manager.start_edit("b", "Books")

    assert manager.editing_id == "b"
    assert manager.edit_buffer == "Books"

    manager.cancel_edit()
    assert manager.editing_id is None
    assert manager.edit_buffer == ""


def test_category_manager_blank_name_is_not_stored(ctx):
    manager = CategoryManager(ctx)
    manager.new_name = "   "
    manager.add()

    assert manager.new_name == "   "
    assert manager.categories == []


def test_category_manager_swallows_errors(recorder):
    manager = CategoryManager(_failing_ctx(recorder))
    manager.categories = [{"id": "1", "name": "Sports"}]

    manager.load()
    manager.new_name = "Arts"
    manager.add()
    manager.save("1")
    manager.delete("1")

    assert manager.categories == [{"id": "1", "name": "Sports"}]
    assert manager.new_name == "Arts"


# ---------------------------------------------------------------------------
# Query building
# ---------------------------------------------------------------------------

def test_build_query_omits_empty_filters():
    assert build_query(1, ArticleFilters()) == {"page": "1", "limit": "10"}


def test_build_query_with_every_filter():
    filters = ArticleFilters(category="Sports", search="final", is_featured=True,
                             start_date=date(2024, 2, 1), end_date="2024-02-29T23:59:59Z")
    assert build_query(3, filters, limit=25) == {
        "page": "3",
        "limit": "25",
        "category": "Sports",
        "searchQuery": "final",
        "isFeatured": "true",
        "startDate": "2024-02-01T00:00:00.000Z",
        "endDate": "2024-02-29T23:59:59.000Z",
    }


def test_normalize_date():
    assert normalize_date(None) is None
    assert normalize_date("") is None
    assert normalize_date("2024-06-01") == "2024-06-01T00:00:00.000Z"
    assert normalize_date(datetime(2024, 6, 1, 9, 30)) == "2024-06-01T09:30:00.000Z"
    assert normalize_date(datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)) == "2024-06-01T09:30:00.000Z"


# ---------------------------------------------------------------------------
# ArticleListView
# ---------------------------------------------------------------------------

def test_list_view_mount_loads_articles_and_categories(ctx, api):
    api.post("/api/categories", json={"name": "Sports"})
    _article(api)

    view = ArticleListView(ctx)
    view.mount()

    assert [a["title"] for a in view.articles] == ["Cup final"]
    assert view.total_pages == 1
    assert view.category_options() == ["", "Sports"]


def test_new_category_shows_up_in_list_filter_and_form(ctx):
    manager = CategoryManager(ctx)
    manager.new_name = "Sports"
    manager.add()

    view = ArticleListView(ctx)
    view.mount()
    form = ArticleForm(ctx, "new")
    form.mount()

    assert "Sports" in view.category_options()
    assert "Sports" in form.category_options()


def test_filter_change_resets_page(ctx, api, http):
    for i in range(12):
        _article(api, title=f"Story {i}", category="Sports" if i % 2 else "Politics")

    view = ArticleListView(ctx)
    view.mount()
    assert view.total_pages == 2

    view.set_page(2)
    assert view.page == 2
    assert len(view.articles) == 2

    view.set_filter("category", "Sports")
    assert view.page == 1
    assert {a["category"] for a in view.articles} == {"Sports"}
    assert http.calls[-1]["params"] == {"page": "1", "limit": "10", "category": "Sports"}


def test_search_input_submits_query(ctx, api, http):
    _article(api, title="Budget day")
    _article(api, title="Derby")

    view = ArticleListView(ctx)
    view.set_page(3)
    view.search_input.set_text("budget")
    view.search_input.submit()

    assert view.page == 1
    assert [a["title"] for a in view.articles] == ["Budget day"]
    assert http.calls[-1]["params"]["searchQuery"] == "budget"


def test_set_filter_rejects_unknown_name(ctx):
    with pytest.raises(KeyError):
        ArticleListView(ctx).set_filter("author", "sam")


def test_featured_only_and_date_filters(ctx, api):
    _article(api, title="Lead", isFeatured=True, publishDate="2024-02-10T08:00:00Z")
    _article(api, title="Old lead", isFeatured=True, publishDate="2023-02-10T08:00:00Z")
    _article(api, title="Brief", publishDate="2024-02-11T08:00:00Z")

    view = ArticleListView(ctx)
    view.set_filter("is_featured", True)
    view.set_filter("start_date", date(2024, 1, 1))

    assert [a["title"] for a in view.articles] == ["Lead"]


def test_toggle_featured_resends_full_record(ctx, api, http):
    article = _article(api, featuredImage="/static/uploads/a.png")
    view = ArticleListView(ctx)
    view.mount()
    http.calls.clear()

    updated = view.toggle_featured(article["id"])

    fetched = http.calls_to("GET", f"/api/articles/{article['id']}")
    put = http.calls_to("PUT", f"/api/articles/{article['id']}")
    assert len(fetched) == 1 and len(put) == 1
    assert put[0]["json"] == dict(article, isFeatured=True)
    assert updated["isFeatured"] is True
    assert view.articles[0]["isFeatured"] is True
    assert api.get(f"/api/articles/{article['id']}")["isFeatured"] is True

    view.toggle_featured(article["id"])
    assert api.get(f"/api/articles/{article['id']}")["isFeatured"] is False


def test_toggle_featured_failure_leaves_state(recorder):
    view = ArticleListView(_failing_ctx(recorder))
    view.articles = [{"id": "1", "isFeatured": False}]

    assert view.toggle_featured("1") is None
    assert view.articles == [{"id": "1", "isFeatured": False}]


def test_delete_refetches(ctx, api, http):
    keep = _article(api, title="Keep")
    drop = _article(api, title="Drop")
    view = ArticleListView(ctx)
    view.mount()
    http.calls.clear()

    view.delete(drop["id"])

    assert [c["method"] for c in http.calls] == ["DELETE", "GET"]
    assert [a["id"] for a in view.articles] == [keep["id"]]


def test_list_view_swallows_fetch_errors(recorder):
    view = ArticleListView(_failing_ctx(recorder))
    view.articles = [{"id": "1"}]

    view.mount()
    view.delete("1")

    assert view.articles == [{"id": "1"}]
    assert view.loading is False


def test_unparseable_date_filter_is_logged_not_raised(ctx, api, http, caplog):
    _article(api, title="Keep me")
    view = ArticleListView(ctx)
    view.mount()
    http.calls.clear()

    view.set_filter("start_date", "01/02/2024")

    assert view.page == 1
    assert [a["title"] for a in view.articles] == ["Keep me"]
    assert view.loading is False
    assert http.calls == []
    assert "Error fetching articles" in caplog.text


# ---------------------------------------------------------------------------
# ArticleForm
# ---------------------------------------------------------------------------

def test_submit_blocked_until_required_fields_present(ctx, http, recorder):
    form = ArticleForm(ctx, "new")
    form.mount()
    http.calls.clear()

    form.set_field("title", "Cup final")
    form.set_field("content", "<p>Report</p>")
    assert form.missing_fields() == ["excerpt", "category"]
    assert form.submit() is False
    assert http.calls == []
    assert recorder.paths == []


def test_create_submits_then_redirects(ctx, api, http, recorder):
    form = ArticleForm(ctx, "new")
    form.mount()
    for name, value in (("title", "Cup final"), ("excerpt", "Late winner"),
                        ("category", "Sports"), ("content", "<p>Report</p>")):
        form.set_field(name, value)

    assert form.submit() is True

    posted = http.calls_to("POST", "/api/articles")
    assert len(posted) == 1
    assert posted[0]["json"]["content"] == "<p>Report</p>"
    assert form.success == "Article saved successfully!"
    assert form.data["title"] == ""
    assert form.editor.html == ""
    assert recorder.sleeps == [1.5]
    assert recorder.paths == ["/admin/articles/"]
    assert ctx.location == "/admin/articles/"

    stored = api.get("/api/articles")["articles"]
    assert [a["title"] for a in stored] == ["Cup final"]


def test_edit_loads_and_puts(ctx, api, http, recorder):
    article = _article(api)
    form = ArticleForm(ctx, article["id"])
    form.mount()

    assert form.is_editing
    assert form.data["title"] == "Cup final"
    assert form.editor.html == "<p>Report</p>"

    form.set_field("title", "Cup final replay")
    assert form.submit() is True

    put = http.calls_to("PUT", f"/api/articles/{article['id']}")
    assert put[0]["json"]["title"] == "Cup final replay"
    assert api.get(f"/api/articles/{article['id']}")["title"] == "Cup final replay"
    assert recorder.paths == ["/admin/articles/"]


def test_edit_keeps_category_deleted_from_store(ctx, api):
    sport = api.post("/api/categories", json={"name": "Sport"})["category"]
    article = _article(api, category="Sport")
    CategoryManager(ctx).delete(sport["id"])

    form = ArticleForm(ctx, article["id"])
    form.mount()

    assert form.categories == []
    assert form.category_options() == ["Sport"]
    assert form.data["category"] == "Sport"

def test_edit_missing_article_sets_error(ctx):
    form = ArticleForm(ctx, "missing")
    form.mount()

    assert form.error == "Failed to fetch article"
    assert form.loading is False


def test_save_failure_sets_error(recorder):
    form = ArticleForm(_failing_ctx(recorder), "new")
    form.data.update(title="T", excerpt="E", category="C")

    assert form.submit() is False
    assert form.error == "Failed to save article"
    assert form.loading is False
    assert recorder.paths == []


def test_video_upload_shows_thumbnail_field(ctx):
    form = ArticleForm(ctx, "new")
    assert form.show_thumbnail_field is False

    url = form.upload(io.BytesIO(b"video"), "clip.mp4")

    assert url.endswith(".mp4")
    assert form.data["featuredImage"] == url
    assert form.is_video and form.show_thumbnail_field
    assert form.uploading is False

    thumb = form.upload(io.BytesIO(b"img"), "poster.jpg", target="thumbnailImage")
    assert form.data["thumbnailImage"] == thumb


def test_rejected_upload_sets_error(ctx):
    form = ArticleForm(ctx, "new")

    assert form.upload(io.BytesIO(b"text"), "notes.txt") is None
    assert form.error == "Failed to upload image"
    assert form.data["featuredImage"] == ""
    assert form.uploading is False


def test_upload_target_must_be_known(ctx):
    with pytest.raises(ValueError):
        ArticleForm(ctx, "new").upload(io.BytesIO(b""), "a.png", target="title")


# ---------------------------------------------------------------------------
# RichTextEditor
# ---------------------------------------------------------------------------

def test_editor_commit_notifies_host():
    seen = []
    editor = RichTextEditor(on_commit=seen.append)

    assert editor.commit("<p><b>Hi</b></p>") is True
    assert editor.commit("<p><b>Hi</b></p>") is False
    assert seen == ["<p><b>Hi</b></p>"]


def test_editor_reset_does_not_call_back():
    seen = []
    editor = RichTextEditor(on_commit=seen.append)

    assert editor.reset("<h1>Loaded</h1>") is True
    assert editor.reset("<h1>Loaded</h1>") is False
    assert editor.html == "<h1>Loaded</h1>"
    assert seen == []


def test_editor_reset_with_unclean_markup_is_stable():
    seen = []
    editor = RichTextEditor(on_commit=seen.append)

    assert editor.reset('<p onclick="x">y</p>') is True
    assert editor.reset('<p onclick="x">y</p>') is False
    assert editor.reset("<p>y</p>") is False
    assert editor.html == "<p>y</p>"
    assert seen == []


def test_editor_drops_unsupported_markup():
    editor = RichTextEditor()
    editor.commit('<p style="color:red">x<img src="a.png"></p>')
    assert editor.html == "<p>x</p>"
