import io
import os
from types import SimpleNamespace

# Must be set before cancer_api builds its settings and engine.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TRACKING_ENABLED"] = "false"

import numpy as np  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from cancer_api.db.models import Base  # noqa: E402
from cancer_api.db.session import engine  # noqa: E402
from cancer_api.inference.loader import ModelHandle  # noqa: E402
from cancer_api.main import create_app  # noqa: E402


class FakeSession:
    """Stands in for an onnxruntime.InferenceSession returning a fixed score."""

    def __init__(self, probability=0.92, input_name="input"):
        self.probability = probability
        self.input_name = input_name
        self.calls = []

    def get_inputs(self):
        return [SimpleNamespace(name=self.input_name)]

    def run(self, output_names, feed):
        self.calls.append(feed)
        return [np.array([[self.probability]], dtype=np.float32)]


def make_image_bytes(fmt="JPEG", size=(64, 48), color=(200, 30, 30)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def model_handle(fake_session):
    return ModelHandle(session=fake_session, input_name="input", source="s3://test-bucket/models/model.onnx")


@pytest.fixture
def app(model_handle):
    return create_app(loader=lambda settings: model_handle)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def jpeg_bytes():
    return make_image_bytes()
