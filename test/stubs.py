def make_item(object_id, owner_id, aspect_type, archive_id=None, fetched="false"):
    """Build a low-level DynamoDB item the way the intake service stores it."""
    item = {
        'object_id': {'N': str(object_id)},
        'owner_id': {'N': str(owner_id)},
        'aspect_type': {'S': aspect_type},
        'fetched': {'S': fetched},
    }
    if archive_id is not None:
        item['archive_id'] = {'S': archive_id}
    return item


class StubStore:
    """In-memory raw webhook table serving pre-built pages."""

    def __init__(self, pages, fail_on_page=None):
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.start_keys = []
        self.marked = []

    def scan_unfetched(self, exclusive_start_key=None):
        self.start_keys.append(exclusive_start_key)
        index = 0 if exclusive_start_key is None else int(exclusive_start_key['page']['N'])
        if self.fail_on_page is not None and index + 1 == self.fail_on_page:
            raise ConnectionError("store unavailable")
        response = {'Items': self.pages[index]}
        if index + 1 < len(self.pages):
            response['LastEvaluatedKey'] = {'page': {'N': str(index + 1)}}
        return response

    def mark_fetched(self, key):
        self.marked.append(key)


class StubQueue:
    """Records sent messages; optionally fails on the n-th send (1-based)."""

    def __init__(self, fail_on_send=None):
        self.fail_on_send = fail_on_send
        self.attempts = 0
        self.sent = []

    def send_message(self, queue_url, message_body):
        self.attempts += 1
        if self.fail_on_send is not None and self.attempts == self.fail_on_send:
            raise RuntimeError("queue unavailable")
        self.sent.append((queue_url, message_body))
        return f"msg-{self.attempts}"
