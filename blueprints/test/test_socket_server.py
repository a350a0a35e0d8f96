import asyncio

from fastapi import FastAPI

from blueprints.server.events import socket_server
from blueprints.server.events.canvas_emitter import global_emitter
from blueprints.server.events.socket_server import create_socket_app


class TestSocketServer:

    def test_forwarder_replaced_not_stacked(self):
        create_socket_app(FastAPI(), ["*"])
        count = len(global_emitter._listeners)

        create_socket_app(FastAPI(), ["*"])

        assert len(global_emitter._listeners) == count
        assert socket_server._forwarder in global_emitter._listeners

    def test_emit_tasks_held_until_done(self):
        create_socket_app(FastAPI(), ["*"])

        async def fire_and_wait():
            global_emitter.fire({"type": "CANVAS_CHANGED", "action": "RESET", "outline": ""})
            tasks = list(socket_server._pending_emits)
            assert len(tasks) == 1
            await asyncio.gather(*tasks)
            await asyncio.sleep(0)
            assert not socket_server._pending_emits

        asyncio.run(fire_and_wait())

    def test_fire_without_running_loop(self):
        create_socket_app(FastAPI(), ["*"])
        global_emitter.fire({"type": "CANVAS_CHANGED", "action": "RESET", "outline": ""})
        assert not socket_server._pending_emits
