from database.manager import HabitManager

from tests.conftest import OWNER_CHAT_ID


async def test_morning_plan_then_evening_review(controller, manager, gateway, tmp_path, fixed_clock):
    await controller.handle_command("addhabit", "Exercise", OWNER_CHAT_ID)
    habit = manager.list_habits()[0]

    await controller.send_morning_plan()
    yes_token = gateway.prompts[-1][2][0]
    assert yes_token == f"plan_yes_{habit.id}"
    await controller.handle_interaction(yes_token, OWNER_CHAT_ID, 100, "morning")

    await controller.send_evening_review()
    review_tokens = gateway.prompts[-1][2]
    assert review_tokens == [f"review_yes_{habit.id}", f"review_no_{habit.id}"]
    await controller.handle_interaction(review_tokens[1], OWNER_CHAT_ID, 101, "evening")

    logs = manager.get_daily_logs(controller.today())
    assert [(log.habit_id, log.planned, log.completed) for log in logs] == [(habit.id, True, False)]

    # состояние переживает перезапуск
    reloaded = HabitManager.from_directory(tmp_path, clock=fixed_clock)
    assert reloaded.get_daily_logs(controller.today()) == logs
    assert [r.completed for r in reloaded.list_responses()] == [False]
