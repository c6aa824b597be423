import pytest


class FakeResponse:
    def __init__(self, data=None, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Records the PostgREST builder chain and answers from the owning FakeSupabase."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def _record(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def insert(self, *args, **kwargs):
        return self._record("insert", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def or_(self, *args, **kwargs):
        return self._record("or_", *args, **kwargs)

    def gte(self, *args, **kwargs):
        return self._record("gte", *args, **kwargs)

    def lte(self, *args, **kwargs):
        return self._record("lte", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def limit(self, *args, **kwargs):
        return self._record("limit", *args, **kwargs)

    def call(self, name):
        return next((c for c in self.calls if c[0] == name), None)

    def execute(self):
        self.client.queries.append(self)
        names = [c[0] for c in self.calls]
        if "insert" in names:
            self.client.events.append("insert")
            if self.client.insert_error:
                raise self.client.insert_error
            row = dict(self.call("insert")[1][0])
            row.setdefault("id", "9b2f1c1e-0000-4000-8000-000000000001")
            row.setdefault("created_at", "2024-05-10T15:30:00+00:00")
            row.setdefault("user_id", "user-1")
            return FakeResponse([row])
        if self.client.select_error:
            raise self.client.select_error
        select = self.call("select")
        if select and select[2].get("count"):
            return FakeResponse([], count=self.client.count)
        return FakeResponse([dict(r) for r in self.client.rows])


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def upload(self, path, file, file_options=None):
        self.client.events.append("upload")
        self.client.uploads.append({"bucket": self.name, "path": path, "file": file, "options": file_options})
        if self.client.upload_error:
            raise self.client.upload_error
        return {"Key": f"{self.name}/{path}"}

    def create_signed_url(self, path, expires_in):
        if self.client.sign_error:
            raise self.client.sign_error
        self.client.signed.append((self.name, path, expires_in))
        return {"signedURL": f"https://example.supabase.co/storage/v1/object/sign/{self.name}/{path}?token=t"}


class FakeStorage:
    def __init__(self, client):
        self.client = client

    def from_(self, name):
        return FakeBucket(self.client, name)


class FakeSupabase:
    def __init__(self, rows=None, count=0):
        self.rows = rows or []
        self.count = count
        self.queries = []
        self.uploads = []
        self.signed = []
        self.events = []
        self.upload_error = None
        self.insert_error = None
        self.select_error = None
        self.sign_error = None
        self.storage = FakeStorage(self)

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def receipt_row():
    return {
        "id": "9b2f1c1e-0000-4000-8000-000000000002",
        "created_at": "2024-05-10T15:31:00+00:00",
        "nf_number": "001245",
        "receiver_name": "Ricardo Silva",
        "product_description": '2x Monitor LG 27"',
        "delivery_date": "2024-05-10T15:30:00+00:00",
        "image_path": "1715355000000_001245.jpg",
        "content_type": "image/jpeg",
        "user_id": "user-1",
    }


@pytest.fixture
def demo_mode(monkeypatch):
    """No Supabase, Mistral or Doppler credentials; fresh Streamlit caches."""
    from giem.utils import supabase_utils
    from giem.views.history import cached_image_url

    names = (
        supabase_utils.SUPABASE_URL_NAMES
        + supabase_utils.SUPABASE_KEY_NAMES
        + supabase_utils.MISTRAL_KEY_NAMES
        + ("DOPPLER_TOKEN", "DOPPLER_PROJECT", "DOPPLER_CONFIG")
    )
    for name in names:
        monkeypatch.delenv(name, raising=False)
    caches = (supabase_utils.get_supabase_client, supabase_utils.bootstrap_secrets, cached_image_url)
    for cached in caches:
        cached.clear()
    yield
    for cached in caches:
        cached.clear()
