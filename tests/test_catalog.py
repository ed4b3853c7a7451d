def test_root_redirects_to_catalog(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/catalog/"


def test_home_counts_empty_catalog(client):
    response = client.get("/catalog/")
    assert response.status_code == 200
    assert response.context["data"] == {
        "book_count": 0,
        "book_instance_count": 0,
        "book_instance_available_count": 0,
        "author_count": 0,
        "genre_count": 0,
    }


def test_home_counts_seeded_catalog(client, seed):
    authors = [seed.author("Patrick", "Rothfuss"), seed.author("Ben", "Bova")]
    for name in ("Fantasy", "Science Fiction", "Poetry", "Horror"):
        seed.genre(name)
    books = [
        seed.book("The Name of the Wind", authors[0]),
        seed.book("The Wise Man's Fear", authors[0]),
        seed.book("Death Wave", authors[1]),
    ]
    for book, status in zip(books + books[:2], ["Available", "Loaned", "Available", "Maintenance", "Reserved"]):
        seed.instance(book, status=status)

    data = client.get("/catalog/").context["data"]
    counts = (
        data["book_count"],
        data["book_instance_count"],
        data["book_instance_available_count"],
        data["author_count"],
        data["genre_count"],
    )
    assert counts == (3, 5, 2, 2, 4)


def test_unknown_route_renders_error_page(client):
    response = client.get("/catalog/nowhere")
    assert response.status_code == 404
    assert response.context["status"] == 404
