"""
Tests for the Post Form Controller

Tests for validation, trimming, the in-progress guard and error display.
"""

import asyncio

import pytest

from post_manager.api.models import PostFields
from post_manager.exceptions import HttpError
from post_manager.store import PostForm


def fill(form, date="31 jul 2025", title="Erros de design", read_time="3 minutos"):
    form.date = date
    form.title = title
    form.read_time = read_time


class TestValidation:
    """Tests for local validation."""

    @pytest.mark.asyncio
    async def test_empty_form_is_not_submitted(self):
        calls = []

        async def on_submit(fields):
            calls.append(fields)

        form = PostForm(on_submit)

        assert not await form.submit()
        assert calls == []
        assert form.field_errors == {
            "date": "Enter Date",
            "title": "Enter Title",
            "readTime": "Enter Read time",
        }

    def test_whitespace_only_is_invalid(self):
        form = PostForm(None)
        fill(form, title="   ")

        assert not form.validate()
        assert list(form.field_errors) == ["title"]


class TestSubmit:
    """Tests for submitting the form."""

    @pytest.mark.asyncio
    async def test_submit_trims_and_clears(self):
        """Test that values are trimmed and the form is emptied on success."""
        calls = []

        async def on_submit(fields):
            calls.append(fields)

        form = PostForm(on_submit)
        fill(form, date=" 31 jul 2025 ", title="Erros de design  ")

        assert await form.submit()
        assert calls == [PostFields("31 jul 2025", "Erros de design", "3 minutos")]
        assert form.fields == PostFields()
        assert not form.submitting

    @pytest.mark.asyncio
    async def test_failure_keeps_values(self):
        """Test that a failed submission shows the error and keeps input."""

        async def on_submit(fields):
            raise HttpError(500, "create")

        form = PostForm(on_submit)
        fill(form)

        assert not await form.submit()
        assert form.error == "create failed with HTTP 500"
        assert form.title == "Erros de design"
        assert not form.submitting

    @pytest.mark.asyncio
    async def test_second_submit_ignored_while_pending(self):
        """Test that the form blocks a duplicate submission."""
        release = asyncio.Event()
        calls = []

        async def on_submit(fields):
            calls.append(fields)
            await release.wait()

        form = PostForm(on_submit, submit_label="Create")
        fill(form)

        first = asyncio.create_task(form.submit())
        await asyncio.sleep(0)
        assert form.submitting
        assert form.button_label == "Saving..."

        assert not await form.submit()

        release.set()
        assert await first
        assert len(calls) == 1
        assert form.button_label == "Create"

    @pytest.mark.asyncio
    async def test_dispose_during_submit(self):
        """Test that a disposed form is left untouched when the call returns."""
        release = asyncio.Event()

        async def on_submit(fields):
            await release.wait()
            raise HttpError(500, "create")

        form = PostForm(on_submit)
        fill(form)

        task = asyncio.create_task(form.submit())
        await asyncio.sleep(0)
        form.dispose()
        release.set()

        assert not await task
        assert form.error is None
        assert not await form.submit()


class TestStoreForms:
    """Tests for forms bound to a store."""

    @pytest.mark.asyncio
    async def test_create_form(self, store, backend):
        form = PostForm.for_create(store)
        fill(form)

        assert await form.submit()
        assert [p.title for p in store.records] == ["Erros de design"]
        assert not form.can_cancel

    @pytest.mark.asyncio
    async def test_edit_form(self, store, backend):
        backend.seed_samples()
        await store.load()
        store.start_editing("1")

        form = PostForm.for_edit(store, store.state.editing)
        assert form.title == "Design mistakes everyone should avoid"
        assert form.submit_label == "Update"

        form.title = "Renamed"
        assert await form.submit()

        assert store.state.find("1").title == "Renamed"
        assert store.state.editing is None

    @pytest.mark.asyncio
    async def test_edit_form_cancel(self, store, backend):
        backend.seed_samples()
        await store.load()
        store.start_editing("1")

        form = PostForm.for_edit(store, store.state.editing)
        form.cancel()

        assert store.state.editing_id is None

    @pytest.mark.asyncio
    async def test_edit_form_failure(self, store, backend):
        backend.seed_samples()
        await store.load()
        store.start_editing("1")
        form = PostForm.for_edit(store, store.state.editing)
        form.title = "Renamed"

        backend.fail("PUT", 500)

        assert not await form.submit()
        assert form.error == "update failed with HTTP 500"
        assert form.title == "Renamed"
        assert store.state.editing_id == "1"
