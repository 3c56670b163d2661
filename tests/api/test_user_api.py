"""API tests for user endpoints."""

import pytest
from httpx import AsyncClient


class TestUserAPI:
    """API tests for user endpoints."""

    @pytest.mark.asyncio
    async def test_create_user_success(self, client: AsyncClient):
        """Test successful user creation."""
        response = await client.post("/user", json={"first_name": "Grace", "last_name": "Hopper"})

        assert response.status_code == 201
        assert response.json() == {"message": "User was successfully created"}

        users = (await client.get("/users")).json()
        assert len(users) == 1
        assert users[0]["first_name"] == "Grace"
        assert users[0]["last_name"] == "Hopper"

    @pytest.mark.asyncio
    async def test_create_user_duplicate(self, client: AsyncClient, test_user: dict):
        """Test that a duplicate name pair is a conflict."""
        response = await client.post(
            "/user", json={"first_name": test_user["first_name"], "last_name": test_user["last_name"]}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == (
            f"User with this name: {test_user['first_name']}, "
            f"and last name: {test_user['last_name']}, already exists"
        )
        assert len((await client.get("/users")).json()) == 1

    @pytest.mark.asyncio
    async def test_create_user_validation_errors(self, client: AsyncClient):
        """Test user creation validation errors."""
        response = await client.post("/user", json={})
        assert response.status_code == 400

        response = await client.post("/user", json={"first_name": "", "last_name": "Hopper"})
        assert response.status_code == 400

        response = await client.post("/user", json={"first_name": "Grace"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_user_malformed_json(self, client: AsyncClient):
        """Test that a body that is not JSON is a bad request."""
        response = await client.post(
            "/user", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "detail" in response.json()

    @pytest.mark.asyncio
    async def test_get_user_success(self, client: AsyncClient, test_user: dict):
        """Test getting a user by ID."""
        response = await client.get(f"/user/{test_user['id']}")

        assert response.status_code == 200
        assert response.json() == test_user

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, client: AsyncClient):
        """Test getting a non-existent user."""
        response = await client.get("/user/99999")

        assert response.status_code == 404
        assert response.json()["detail"] == "User with id 99999 does not exist"

    @pytest.mark.asyncio
    async def test_get_user_invalid_id(self, client: AsyncClient):
        """Test that a non-integer ID is a bad request."""
        response = await client.get("/user/abc")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_users(self, client: AsyncClient, test_user: dict, test_user_2: dict):
        """Test listing users."""
        response = await client.get("/users")

        assert response.status_code == 200
        assert response.json() == [test_user, test_user_2]

    @pytest.mark.asyncio
    async def test_get_users_empty(self, client: AsyncClient):
        """Test listing users when there are none."""
        response = await client.get("/users")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_update_user_success(self, client: AsyncClient, test_user: dict):
        """Test renaming a user."""
        response = await client.put(f"/user/{test_user['id']}", json={"first_name": "Augusta", "last_name": "King"})

        assert response.status_code == 200
        assert response.json() == {"message": "User was updated successfully"}

        user = (await client.get(f"/user/{test_user['id']}")).json()
        assert user["first_name"] == "Augusta"
        assert user["last_name"] == "King"

    @pytest.mark.asyncio
    async def test_update_user_not_found(self, client: AsyncClient):
        """Test updating a non-existent user."""
        response = await client.put("/user/99999", json={"first_name": "No", "last_name": "Body"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_user_conflict(self, client: AsyncClient, test_user: dict, test_user_2: dict):
        """Test renaming a user to another user's names."""
        response = await client.put(
            f"/user/{test_user['id']}",
            json={"first_name": test_user_2["first_name"], "last_name": test_user_2["last_name"]},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete_user_success(self, client: AsyncClient, test_user: dict):
        """Test deleting a user."""
        response = await client.delete(f"/user/{test_user['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "User was successfully deleted"}

        response = await client.get(f"/user/{test_user['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_user_not_found(self, client: AsyncClient):
        """Test deleting a non-existent user."""
        response = await client.delete("/user/99999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_user_with_borrows(self, client: AsyncClient, active_borrow: dict):
        """Test that a user holding a book cannot be deleted."""
        response = await client.delete(f"/user/{active_borrow['user_id']}")

        assert response.status_code == 409

        response = await client.get(f"/user/{active_borrow['user_id']}")
        assert response.status_code == 200
