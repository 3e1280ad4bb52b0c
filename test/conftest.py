import pytest
from fastapi.testclient import TestClient

from storefront.main import create_app
from storefront.services.media import MediaUploadError, get_media_sink


class FakeSink:
    """Stands in for Cloudinary; records uploads and returns a stable URL."""

    def __init__(self):
        self.uploads = []
        self.error = None

    def upload(self, filename, content, content_type=None):
        if self.error:
            raise MediaUploadError(self.error)
        self.uploads.append((filename, content, content_type))
        return f"https://res.cloudinary.com/demo/image/upload/v1/educate_a_girl/{filename}"


@pytest.fixture
def media_sink():
    return FakeSink()


@pytest.fixture
def app(tmp_path, media_sink):
    app = create_app(f"sqlite:///{tmp_path / 'test.db'}")
    app.dependency_overrides[get_media_sink] = lambda: media_sink
    return app


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan (pool + tables)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    return app.state.db


@pytest.fixture
def product(client):
    resp = client.post(
        "/api/products",
        json={
            "id": "scarf-01",
            "name": "Handwoven Scarf",
            "price": 40,
            "offerPrice": 32.5,
            "category": "Textiles",
            "description": "Wool scarf woven by the cooperative.",
            "material": "Wool",
            "dimensions": "180 x 30 cm",
            "origin": "Cusco",
            "impact": "Funds one month of school supplies.",
            "details": ["Hand wash", "Natural dyes"],
            "story": {"maker": "Rosa", "hours": 12},
            "images": ["https://img.example/scarf-1.jpg", "https://img.example/scarf-2.jpg"],
            "stock": 7,
        },
    )
    assert resp.status_code == 201
    return resp.json()
