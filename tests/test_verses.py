"""
Tests for Verses API Endpoints

GET .../books/{bookOrder}/chapters/{chapterNumber}/verses
GET .../books/{bookOrder}/chapters/{chapterNumber}/verses/{verseNumber}
"""

from fastapi import status

BOOKS_URL = "/api/v1/public/bible/books"


class TestListVerses:
    """Tests for GET .../chapters/{chapterNumber}/verses."""

    def test_list_verses_success(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/1/chapters/1/verses")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [v["number"] for v in data["data"]] == [1, 2, 3]
        assert set(data["data"][0]) == {"id", "chapterId", "number", "text"}
        assert data["data"][0]["text"].startswith("In the beginning")
        assert data["pagination"]["totalItems"] == 3

    def test_list_verses_pagination(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/1/chapters/1/verses?limit=2")

        data = response.json()
        assert [v["number"] for v in data["data"]] == [1, 2]
        assert data["pagination"]["totalPages"] == 2
        assert data["pagination"]["hasNextPage"] is True

    def test_list_verses_empty_chapter(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/1/chapters/2/verses")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == []
        assert response.json()["pagination"]["totalPages"] == 0

    def test_list_verses_book_not_found(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/9/chapters/1/verses")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "BOOK_NOT_FOUND"

    def test_list_verses_chapter_not_found(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/1/chapters/9/verses")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "CHAPTER_NOT_FOUND"

    def test_list_verses_invalid_book_order(self, client):
        response = client.get(f"{BOOKS_URL}/74/chapters/1/verses")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["code"] == "INVALID_BOOK_ORDER"

    def test_list_verses_invalid_chapter(self, client):
        response = client.get(f"{BOOKS_URL}/1/chapters/0/verses")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            "success": False,
            "error": "Provide a valid chapter number (>=1).",
            "code": "INVALID_CHAPTER_NUMBER",
        }


class TestGetVerse:
    """Tests for GET .../chapters/{chapterNumber}/verses/{verseNumber}."""

    def test_get_verse_success(self, client, matthew):
        response = client.get(f"{BOOKS_URL}/47/chapters/1/verses/1")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["number"] == 1
        assert data["text"] == "The book of the genealogy of Jesus Christ."
        assert data["chapterId"] == str(matthew.chapters[0].id)

    def test_get_verse_not_found(self, client, genesis):
        """Every missing level is reported as VERSE_NOT_FOUND."""
        for path in ("1/chapters/1/verses/99", "1/chapters/9/verses/1", "9/chapters/1/verses/1"):
            response = client.get(f"{BOOKS_URL}/{path}")

            assert response.status_code == status.HTTP_404_NOT_FOUND
            assert response.json() == {
                "success": False,
                "error": "Verse not found.",
                "code": "VERSE_NOT_FOUND",
            }

    def test_get_verse_invalid_parameters(self, client):
        for path in ("74/chapters/1/verses/1", "1/chapters/0/verses/1", "1/chapters/1/verses/x"):
            response = client.get(f"{BOOKS_URL}/{path}")

            assert response.status_code == status.HTTP_400_BAD_REQUEST
            assert response.json()["code"] == "INVALID_PARAMETERS"
            assert response.json()["error"] == "Provide valid numbers for book, chapter, and verse."

    def test_get_verse_oversized_number(self, client, genesis):
        response = client.get(f"{BOOKS_URL}/1/chapters/1/verses/99999999999999999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["code"] == "VERSE_NOT_FOUND"
