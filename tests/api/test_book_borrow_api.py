"""API tests for book borrowing endpoints."""

import pytest
from httpx import AsyncClient


class TestBookBorrowAPI:
    """API tests for book borrowing endpoints."""

    @pytest.mark.asyncio
    async def test_borrow_and_return_flow(self, client: AsyncClient):
        """Test the full borrow and return cycle through the API."""
        response = await client.post("/book", json={"title": "Foundation", "quantity": 5})
        assert response.status_code == 201
        response = await client.post("/user", json={"first_name": "Isaac", "last_name": "Asimov"})
        assert response.status_code == 201

        book_id = (await client.get("/books")).json()[0]["id"]
        user_id = (await client.get("/users")).json()[0]["id"]
        borrow_data = {"book_id": book_id, "user_id": user_id}

        response = await client.post("/book_borrow", json=borrow_data)
        assert response.status_code == 200
        assert response.json() == {"message": "Book was successfully borrowed"}
        assert (await client.get(f"/book/{book_id}")).json()["quantity"] == 4

        borrowed = (await client.get("/book_borrowed")).json()
        assert len(borrowed) == 1
        assert borrowed[0]["book_id"] == book_id
        assert borrowed[0]["user_id"] == user_id
        assert borrowed[0]["return_date"] is None

        response = await client.put("/book_borrow", json=borrow_data)
        assert response.status_code == 200
        assert response.json() == {"message": "Book was successfully returned"}
        assert (await client.get(f"/book/{book_id}")).json()["quantity"] == 5
        assert (await client.get("/book_borrowed")).json() == []

    @pytest.mark.asyncio
    async def test_borrow_unavailable_book(self, client: AsyncClient, unavailable_book: dict, test_user: dict):
        """Test borrowing a book with no copies left."""
        response = await client.post(
            "/book_borrow", json={"book_id": unavailable_book["id"], "user_id": test_user["id"]}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Book is not available"
        assert (await client.get(f"/book/{unavailable_book['id']}")).json()["quantity"] == 0

    @pytest.mark.asyncio
    async def test_borrow_already_borrowed(self, client: AsyncClient, active_borrow: dict, borrow_count):
        """Test borrowing a book the user already holds."""
        response = await client.post(
            "/book_borrow", json={"book_id": active_borrow["book_id"], "user_id": active_borrow["user_id"]}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Book is already borrowed"
        assert await borrow_count(active_borrow["book_id"], active_borrow["user_id"]) == 1

    @pytest.mark.asyncio
    async def test_borrow_unknown_book(self, client: AsyncClient, test_user: dict):
        """Test borrowing a book that does not exist."""
        response = await client.post("/book_borrow", json={"book_id": 99999, "user_id": test_user["id"]})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_borrow_unknown_user(self, client: AsyncClient, test_book: dict):
        """Test borrowing for a user that does not exist."""
        response = await client.post("/book_borrow", json={"book_id": test_book["id"], "user_id": 99999})

        assert response.status_code == 404
        assert (await client.get(f"/book/{test_book['id']}")).json()["quantity"] == test_book["quantity"]

    @pytest.mark.asyncio
    async def test_borrow_validation_errors(self, client: AsyncClient):
        """Test borrow request validation errors."""
        response = await client.post("/book_borrow", json={"book_id": 1})
        assert response.status_code == 400

        response = await client.post("/book_borrow", json={"book_id": 0, "user_id": 1})
        assert response.status_code == 400

        response = await client.put("/book_borrow", json={"book_id": "one", "user_id": 1})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_borrow_ids_must_be_integers(self, client: AsyncClient, test_book: dict, test_user: dict, quantity_of):
        """Test that numeric strings and floats are not accepted as ids."""
        response = await client.post("/book_borrow", json={"book_id": str(test_book["id"]), "user_id": test_user["id"]})
        assert response.status_code == 400

        response = await client.post("/book_borrow", json={"book_id": test_book["id"], "user_id": float(test_user["id"])})
        assert response.status_code == 400

        assert await quantity_of(test_book["id"]) == test_book["quantity"]

    @pytest.mark.asyncio
    async def test_return_not_borrowed(self, client: AsyncClient, test_book: dict, test_user: dict):
        """Test returning a book the user does not hold."""
        response = await client.put("/book_borrow", json={"book_id": test_book["id"], "user_id": test_user["id"]})

        assert response.status_code == 409
        assert response.json()["detail"] == "Book is not borrowed"
        assert (await client.get(f"/book/{test_book['id']}")).json()["quantity"] == test_book["quantity"]

    @pytest.mark.asyncio
    async def test_get_available_books(
        self, client: AsyncClient, test_book: dict, unavailable_book: dict, test_book_2: dict
    ):
        """Test that only books with copies left are listed."""
        response = await client.get("/book_borrow")

        assert response.status_code == 200
        assert [book["id"] for book in response.json()] == [test_book["id"], test_book_2["id"]]

    @pytest.mark.asyncio
    async def test_get_borrowed_books(self, client: AsyncClient, active_borrow: dict):
        """Test listing active borrows."""
        response = await client.get("/book_borrowed")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["id"] == active_borrow["id"]
        assert data[0]["borrow_date"] is not None
        assert data[0]["return_date"] is None


class TestServiceEndpoints:
    """API tests for health check and request tracing."""

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client: AsyncClient):
        response = await client.get("/users")

        assert response.headers["X-Request-ID"]
