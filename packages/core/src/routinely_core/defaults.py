"""Default routine template used by the reset operation."""

DEFAULT_ROUTINE = [
    {"task_name": "Sleep", "start_time": "12:00 AM", "end_time": "8:00 AM"},
    {"task_name": "Morning & Breakfast", "start_time": "8:00 AM", "end_time": "10:00 AM"},
    {"task_name": "Work 1", "start_time": "10:00 AM", "end_time": "12:00 PM"},
    {"task_name": "Gym", "start_time": "12:00 PM", "end_time": "2:00 PM"},
    {"task_name": "Lunch", "start_time": "2:00 PM", "end_time": "3:00 PM"},
    {"task_name": "Work 2", "start_time": "3:00 PM", "end_time": "5:00 PM"},
    {"task_name": "Break", "start_time": "5:00 PM", "end_time": "6:00 PM"},
    {"task_name": "Work 3", "start_time": "6:00 PM", "end_time": "8:00 PM"},
    {"task_name": "Dinner & Rest", "start_time": "8:00 PM", "end_time": "12:00 AM"},
]

__all__ = ["DEFAULT_ROUTINE"]
