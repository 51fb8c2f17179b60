import asyncio

from components.modules.autosave import ERROR, IDLE, SAVED, NotesAutosaver


class Recorder:
    def __init__(self, fail_times=0):
        self.saved = []
        self.fail_times = fail_times

    async def __call__(self, text):
        if self.fail_times:
            self.fail_times -= 1
            raise ConnectionError("offline")
        self.saved.append(text)


async def test_saves_once_after_idle_period():
    save = Recorder()
    saver = NotesAutosaver(save, delay=0.05)

    saver.update("B")
    saver.update("Bi")
    saver.update("Bismillah")
    assert saver.status == IDLE
    assert saver.has_unsaved_changes

    await asyncio.sleep(0.15)
    assert save.saved == ["Bismillah"]
    assert saver.status == SAVED
    assert saver.last_saved_at is not None
    assert not saver.has_unsaved_changes


async def test_unchanged_text_is_not_saved():
    save = Recorder()
    saver = NotesAutosaver(save, delay=0.01, initial="same")
    saver.update("same")
    await asyncio.sleep(0.05)
    assert save.saved == []


async def test_failure_is_reported_and_not_retried_automatically():
    save = Recorder(fail_times=1)
    saver = NotesAutosaver(save, delay=0.01)

    saver.update("draft")
    await asyncio.sleep(0.05)
    assert saver.status == ERROR
    assert isinstance(saver.last_error, ConnectionError)
    assert saver.has_unsaved_changes

    await asyncio.sleep(0.05)
    assert save.saved == []

    await saver.retry()
    assert save.saved == ["draft"]
    assert saver.status == SAVED
    assert saver.last_error is None


async def test_flush_saves_immediately():
    save = Recorder()
    saver = NotesAutosaver(save, delay=10)
    saver.update("leaving the page")
    await saver.flush()
    assert save.saved == ["leaving the page"]
    saver.close()


async def test_close_cancels_pending_save():
    save = Recorder()
    saver = NotesAutosaver(save, delay=0.02)
    saver.update("never sent")
    saver.close()
    await asyncio.sleep(0.05)
    assert save.saved == []


async def test_saver_writes_module_notes_through_api(client, auth, content):
    sent = []

    async def save(text):
        sent.append(text)
        response = await client.put("/modules/foundations/notes", headers=auth, json={"content": text})
        response.raise_for_status()

    saver = NotesAutosaver(save, delay=0.02)
    saver.update("Purpose of")
    saver.update("Purpose of marriage: tranquility")
    await asyncio.sleep(0.5)

    assert sent == ["Purpose of marriage: tranquility"]
    assert saver.status == SAVED
    response = await client.get("/modules/foundations/notes", headers=auth)
    assert response.json()["content"] == "Purpose of marriage: tranquility"

    saver.update("Purpose of marriage: tranquility and mercy")
    await saver.flush()
    response = await client.get("/modules/foundations/notes", headers=auth)
    assert response.json()["content"] == "Purpose of marriage: tranquility and mercy"
    saver.close()
