from html import escape
from typing import Dict, List

from models.habit import Habit, DailyLog


def habit_label(habit_id: int, name: str = None) -> str:
    return name if name else f"#{habit_id}"


def welcome_message(morning_time: str, evening_time: str):
    return (
        "Добро пожаловать в Habit Tracker Bot! 🎯\n\n"
        "Я помогу отслеживать ежедневные привычки.\n"
        "📅 <b>Распорядок дня:</b>\n"
        f"🌅 {morning_time} - планирование дня\n"
        f"🌙 {evening_time} - подведение итогов\n\n"
        "Используй /help для списка команд."
    )


def help_message():
    return (
        "📋 <b>Доступные команды:</b>\n\n"
        "/start - запустить бота\n"
        "/help - показать эту справку\n"
        "/addhabit &lt;название&gt; - добавить привычку\n"
        "/listhabits - список привычек\n"
        "/deletehabit &lt;id&gt; - удалить привычку\n"
        "/today - отметки за сегодня\n\n"
        "💡 <b>Пример:</b>\n"
        "<code>/addhabit Зарядка</code>"
    )


def unknown_command_message():
    return "Команда не распознана. Используй /help, чтобы увидеть список команд."


def add_habit_usage_message():
    return "Укажи название привычки.\nПример: /addhabit Зарядка"


def habit_added_message(habit: Habit):
    return f"✅ Привычка добавлена!\n\nID: {habit.id}\nНазвание: {escape(habit.name)}"


def delete_habit_usage_message():
    return "Укажи ID привычки для удаления.\nПример: /deletehabit 1"


def invalid_id_message():
    return "Некорректный ID. Это должно быть число."


def habit_deleted_message():
    return "✅ Привычка удалена!"


def error_message(error):
    return f"❌ Ошибка: {escape(str(error))}"


def save_failed_message():
    return "⚠️ Не удалось сохранить ответ. Попробуй ещё раз."


def no_habits_message():
    return "У тебя пока нет привычек.\nИспользуй /addhabit, чтобы добавить первую."


def habits_list_message(habits: List[Habit]):
    if not habits:
        return no_habits_message()
    lines = [f"<b>ID {habit.id}:</b> {escape(habit.name)}" for habit in habits]
    return "📋 <b>Твои привычки:</b>\n\n" + "\n".join(lines)


def today_status_message(day: str, habits: List[Habit], logs: List[DailyLog]):
    if not habits:
        return no_habits_message()
    by_id: Dict[int, DailyLog] = {log.habit_id: log for log in logs}
    lines = [f"📅 <b>{day}</b>\n"]
    for habit in habits:
        log = by_id.get(habit.id)
        if log is None:
            status = "▫️ без ответа"
        else:
            plan = "👍 в плане" if log.planned else "⏭️ не в плане"
            done = "✅ выполнено" if log.completed else "❌ не выполнено"
            status = f"{plan}, {done}"
        lines.append(f"{escape(habit.name)}: {status}")
    return "\n".join(lines)


# ===== Утро / вечер =====

def morning_greeting_message():
    return "🌅 <b>Доброе утро!</b> Давай спланируем день.\nКакие привычки ты выполнишь сегодня?"


def plan_prompt_message(habit: Habit):
    return f"🎯 <b>{escape(habit.name)}</b>"


def evening_greeting_message():
    return "🌙 <b>Добрый вечер!</b> Время подвести итоги дня."


def evening_nothing_planned_message():
    return "🌙 <b>Добрый вечер!</b> Сегодня ты не запланировал ни одной привычки. Завтра будет новый день!"


def review_prompt_message(habit: Habit):
    return f"❓ <b>{escape(habit.name)}</b>\nПолучилось выполнить?"


# ===== Подтверждения =====

def plan_confirmation(name: str, planned: bool):
    if planned:
        return f"👍 В плане: «{name}»"
    return f"⏭️ Пропуск на сегодня: «{name}»"


def review_confirmation(name: str, completed: bool):
    if completed:
        return f"✅ Выполнено: «{name}»"
    return f"❌ Не выполнено: «{name}»"
