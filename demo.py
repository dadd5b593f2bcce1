"""
CRUD Demo Script

This script demonstrates the store and client working together by:
1. Starting an in-memory posts backend
2. Loading the collection
3. Creating, editing and deleting a post through the forms and the store
4. Printing the collection after every step

Run this to see the complete flow without a server.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from post_manager.api import InMemoryPostsBackend, ResourceClient
from post_manager.main import render
from post_manager.store import PostForm, ResourceStore


def show(title: str, store: ResourceStore) -> None:
    print(f"\n{title}")
    print("-" * 40)
    print(render(store.state))


async def demonstrate_crud():
    """
    Walk through the create/update/delete cycle.

    Every mutation is followed by a full reload, so the printed list is
    always the server's view of the collection.
    """
    print("=" * 60)
    print("Post Manager Demo")
    print("=" * 60)

    backend = InMemoryPostsBackend()
    http_client = backend.client()
    client = ResourceClient("http://posts.local", http_client=http_client)
    store = ResourceStore(client)

    try:
        print("\n[1/5] Loading posts...")
        await store.load()
        show("Empty collection", store)

        print("\n[2/5] Submitting an empty form...")
        form = PostForm.for_create(store)
        await form.submit()
        for message in form.field_errors.values():
            print(f"      [X] {message}")

        print("\n[3/5] Creating a post...")
        form.date = "31 jul 2025"
        form.title = "Design mistakes everyone should avoid"
        form.read_time = "3 minutes"
        if await form.submit():
            print("      [OK] Post created")
        show("After create", store)

        print("\n[4/5] Editing the post...")
        post = store.records[0]
        store.start_editing(post.id)
        edit_form = PostForm.for_edit(store, store.state.editing)
        edit_form.read_time = "4 minutes"
        if await edit_form.submit():
            print("      [OK] Post updated")
        show("After update", store)

        print("\n[5/5] Deleting the post...")
        if await store.remove(post.id, lambda _: True):
            print("      [OK] Post deleted")
        show("After delete", store)

        print(f"\nRequests served: {len(backend.requests)}")
        for method, path in backend.requests:
            print(f"  {method:<6} {path}")

    finally:
        store.close()
        await http_client.aclose()

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(demonstrate_crud())
