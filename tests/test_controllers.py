import asyncio
import tempfile
import os
import unittest
from unittest.mock import AsyncMock, MagicMock

from log_dashboard.config import ConfigManager
from log_dashboard.controllers import DashboardController
from log_dashboard.core.engine import LogEngine


def envelope(*levels, total_lines=None):
    events = [{"line_number": (i + 1) * 10, "time": "t", "level": lvl, "message": "m"}
              for i, lvl in enumerate(levels)]
    return {"total_lines": total_lines or len(levels) * 10, "events": events}


class ControllerTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.config = ConfigManager(os.path.join(self.tmp.name, "app_config.json"))
        self.config.set("mock_seed", 1)

    def tearDown(self):
        self.tmp.cleanup()


class TestReload(ControllerTestCase):
    async def test_initial_state_is_empty(self):
        controller = DashboardController(backend=MagicMock(), config=self.config)
        self.assertTrue(controller.state.is_empty)
        self.assertIsNone(controller.locate(0.5))
        self.assertIsNone(await controller.scrub(0.5))

    async def test_reload_publishes_consistent_state(self):
        backend = MagicMock(return_value=envelope("ERROR", "WARN", "INFO", "ERR"))
        controller = DashboardController(backend=backend, config=self.config)
        listener = MagicMock()
        controller.state_changed.append(listener)

        state = await controller.reload("server.log")

        self.assertIs(controller.state, state)
        listener.assert_called_once_with(state)
        self.assertEqual((state.stats.total, state.stats.errors), (4, 2))
        self.assertEqual(sum(p.value for p in state.series.bar), 4)
        self.assertEqual(sum(p.value for p in state.series.line), 4)
        self.assertEqual(state.batch.source, "server.log")
        self.assertEqual(controller.current_source, "server.log")
        self.assertFalse(controller.is_loading)

    async def test_reload_without_source_reuses_current(self):
        backend = MagicMock(return_value=envelope("INFO"))
        controller = DashboardController(backend=backend, config=self.config)
        await controller.reload("a.log")
        await controller.reload()
        self.assertEqual(backend.call_args_list[-1].args, ("a.log",))

    async def test_degraded_state(self):
        backend = AsyncMock(side_effect=RuntimeError("rpc down"))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.reload("")
        self.assertTrue(state.batch.degraded)
        self.assertEqual(state.stats.total, 54)

    async def test_seeded_fallback_is_repeatable(self):
        backend = AsyncMock(side_effect=RuntimeError("rpc down"))
        controller = DashboardController(backend=backend, config=self.config)
        first = await controller.reload("")
        second = await controller.reload("")
        self.assertEqual(first.batch.events, second.batch.events)

    async def test_bad_mock_settings_still_fall_back(self):
        self.config.set("mock_event_count", "50")
        self.config.set("mock_error_ratio", "0.2")
        self.config.set("mock_seed", [1])
        backend = AsyncMock(side_effect=RuntimeError("rpc down"))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.reload("")
        self.assertTrue(state.batch.degraded)
        self.assertEqual(state.stats.total, 54)

    async def test_unusable_mock_settings_use_defaults(self):
        self.config.set("mock_event_count", "lots")
        self.config.set("mock_error_ratio", {"ratio": 1})
        backend = AsyncMock(side_effect=RuntimeError("rpc down"))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.reload("")
        self.assertEqual(state.stats.total, 54)

    async def test_bucket_count_from_config(self):
        self.config.set("bucket_count", 2)
        backend = MagicMock(return_value=envelope(*["INFO"] * 10))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.reload("")
        self.assertEqual(len(state.series.line), 2)

    async def test_stale_response_is_discarded(self):
        slow_started = asyncio.Event()
        release_slow = asyncio.Event()

        async def backend(source):
            if source == "slow.log":
                slow_started.set()
                await release_slow.wait()
                return envelope("ERROR")
            return envelope("INFO", "INFO")

        controller = DashboardController(backend=backend, config=self.config)
        listener = MagicMock()
        controller.state_changed.append(listener)

        slow = asyncio.create_task(controller.reload("slow.log"))
        await slow_started.wait()
        fast_state = await controller.reload("fast.log")
        release_slow.set()
        slow_state = await slow

        self.assertIsNone(slow_state)
        self.assertIs(controller.state, fast_state)
        self.assertEqual(controller.state.batch.source, "fast.log")
        self.assertEqual(controller.state.stats.total, 2)
        listener.assert_called_once_with(fast_state)

    async def test_async_listener_is_awaited(self):
        controller = DashboardController(backend=MagicMock(return_value=envelope("INFO")), config=self.config)
        listener = AsyncMock()
        controller.state_changed.append(listener)
        state = await controller.reload("")
        listener.assert_awaited_once_with(state)


class TestOpenFile(ControllerTestCase):
    async def test_cancelled_picker_does_nothing(self):
        backend = MagicMock()
        controller = DashboardController(backend=backend, config=self.config)
        self.assertIsNone(await controller.open_file(None))
        self.assertIsNone(await controller.open_file("  "))
        backend.assert_not_called()

    async def test_open_file_cleans_path_and_records_it(self):
        backend = MagicMock(return_value=envelope("INFO"))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.open_file(' "/var/log/app.log" ')
        backend.assert_called_once_with("/var/log/app.log")
        self.assertEqual(state.batch.source, "/var/log/app.log")
        self.assertEqual(self.config.get("recent_files")[0], "/var/log/app.log")

    async def test_fallback_load_names_the_file_actually_read(self):
        fallback = os.path.join(self.tmp.name, "other.log")
        with open(fallback, "w", encoding="utf-8") as f:
            f.write("2023-10-27 10:00:01 ERROR boom\n")
        missing = os.path.join(self.tmp.name, "missing.log")
        controller = DashboardController(backend=LogEngine([fallback]), config=self.config)

        state = await controller.open_file(missing)

        self.assertFalse(state.batch.degraded)
        self.assertEqual(state.batch.source, missing)
        self.assertEqual(state.batch.loaded_from, fallback)
        self.assertEqual(self.config.get("recent_files"), [])

    async def test_readable_file_is_recorded(self):
        path = os.path.join(self.tmp.name, "app.log")
        with open(path, "w", encoding="utf-8") as f:
            f.write("2023-10-27 10:00:01 ERROR boom\n")
        controller = DashboardController(backend=LogEngine([]), config=self.config)

        state = await controller.open_file(path)

        self.assertEqual(state.batch.loaded_from, path)
        self.assertEqual(self.config.get("recent_files"), [path])

    async def test_failed_load_is_not_recorded(self):
        backend = AsyncMock(side_effect=RuntimeError("rpc down"))
        controller = DashboardController(backend=backend, config=self.config)
        state = await controller.open_file("/var/log/app.log")
        self.assertTrue(state.batch.degraded)
        self.assertEqual(self.config.get("recent_files"), [])


class TestScrub(ControllerTestCase):
    async def test_scrub_requests_scroll(self):
        backend = MagicMock(return_value={
            "total_lines": 400,
            "events": [{"line_number": n, "level": "INFO"} for n in (0, 100, 200, 300)],
        })
        controller = DashboardController(backend=backend, config=self.config)
        await controller.reload("")
        scroll = AsyncMock()
        controller.scroll_requested.append(scroll)

        index = await controller.scrub(0.5)

        self.assertEqual(index, 2)
        self.assertEqual(controller.selected_index, 2)
        scroll.assert_awaited_once_with(2)
        self.assertEqual(controller.locate(1.0), 3)
        self.assertEqual(controller.locate(0.0), 0)

    async def test_reload_clears_selection(self):
        backend = MagicMock(return_value=envelope("INFO", "ERROR"))
        controller = DashboardController(backend=backend, config=self.config)
        await controller.reload("")
        await controller.scrub(1.0)
        self.assertEqual(controller.selected_index, 1)
        await controller.reload("")
        self.assertIsNone(controller.selected_index)


if __name__ == '__main__':
    unittest.main()
