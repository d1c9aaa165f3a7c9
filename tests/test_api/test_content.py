"""Tests for blog posts and testimonials."""

import uuid

from httpx import AsyncClient

BLOG_PAYLOAD = {
    "title": "Driving the Great East Road",
    "tag": "Road trips",
    "date": "12 Nov 2025",
    "readingTime": "6 min read",
    "author": "Kasupe Team",
    "excerpt": "What to pack for the drive from Lusaka to Chipata.",
}


class TestBlogs:
    async def test_create_with_paragraph_list(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/admin/blogs",
            json={**BLOG_PAYLOAD, "content": ["  First paragraph. ", "", "Second paragraph."]},
            headers=admin_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["content"] == ["First paragraph.", "Second paragraph."]
        assert data["readingTime"] == "6 min read"

    async def test_create_with_json_string(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/admin/blogs",
            json={**BLOG_PAYLOAD, "content": '["One", "  Two  "]'},
            headers=admin_headers,
        )
        assert response.json()["content"] == ["One", "Two"]

    async def test_create_with_plain_string(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/admin/blogs",
            json={**BLOG_PAYLOAD, "content": "  Just one paragraph.  "},
            headers=admin_headers,
        )
        assert response.json()["content"] == ["Just one paragraph."]

    async def test_public_list_and_get(self, client: AsyncClient, admin_headers: dict):
        created = (await client.post("/api/v1/admin/blogs", json=BLOG_PAYLOAD, headers=admin_headers)).json()

        listing = await client.get("/api/v1/blogs")
        assert [p["id"] for p in listing.json()] == [created["id"]]

        single = await client.get(f"/api/v1/blogs/{created['id']}")
        assert single.status_code == 200
        assert single.json()["content"] == []

    async def test_get_missing(self, client: AsyncClient):
        response = await client.get(f"/api/v1/blogs/{uuid.uuid4()}")
        assert response.status_code == 404

    async def test_update_and_delete(self, client: AsyncClient, admin_headers: dict):
        created = (await client.post("/api/v1/admin/blogs", json=BLOG_PAYLOAD, headers=admin_headers)).json()

        updated = await client.put(
            f"/api/v1/admin/blogs/{created['id']}",
            json={"title": "New title", "content": "Rewritten."},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "New title"
        assert updated.json()["content"] == ["Rewritten."]
        assert updated.json()["tag"] == "Road trips"

        deleted = await client.delete(f"/api/v1/admin/blogs/{created['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert (await client.get(f"/api/v1/blogs/{created['id']}")).status_code == 404

    async def test_admin_routes_require_auth(self, client: AsyncClient):
        response = await client.post("/api/v1/admin/blogs", json=BLOG_PAYLOAD)
        assert response.status_code in (401, 403)


class TestTestimonials:
    async def _create(self, client: AsyncClient, headers: dict, **overrides) -> dict:
        payload = {"name": "  Joseph Tembo ", "role": "Tourist", "trip": " Livingstone ", "text": " Great car! "}
        payload.update(overrides)
        response = await client.post("/api/v1/admin/testimonials", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    async def test_create_trims_text_fields(self, client: AsyncClient, admin_headers: dict):
        data = await self._create(client, admin_headers)
        assert data["name"] == "Joseph Tembo"
        assert data["trip"] == "Livingstone"
        assert data["text"] == "Great car!"
        assert data["rating"] == 5
        assert data["isActive"] is True

    async def test_blank_text_rejected(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/admin/testimonials",
            json={"name": "Joseph", "text": "   "},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_rating_out_of_range(self, client: AsyncClient, admin_headers: dict):
        response = await client.post(
            "/api/v1/admin/testimonials",
            json={"name": "Joseph", "text": "Nice", "rating": 6},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_public_list_shows_only_active(self, client: AsyncClient, admin_headers: dict):
        visible = await self._create(client, admin_headers)
        await self._create(client, admin_headers, name="Hidden", isActive=False)

        public = await client.get("/api/v1/testimonials")
        assert [t["id"] for t in public.json()] == [visible["id"]]

        admin = await client.get("/api/v1/admin/testimonials", headers=admin_headers)
        assert len(admin.json()) == 2

    async def test_update_and_delete(self, client: AsyncClient, admin_headers: dict):
        created = await self._create(client, admin_headers)

        updated = await client.put(
            f"/api/v1/admin/testimonials/{created['id']}",
            json={"isActive": False, "rating": 4},
            headers=admin_headers,
        )
        assert updated.json()["isActive"] is False
        assert updated.json()["rating"] == 4

        deleted = await client.delete(f"/api/v1/admin/testimonials/{created['id']}", headers=admin_headers)
        assert deleted.status_code == 200

        missing = await client.delete(f"/api/v1/admin/testimonials/{created['id']}", headers=admin_headers)
        assert missing.status_code == 404
