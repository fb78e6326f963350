"""Notification copy for hydration reminders"""
import random
from typing import Optional

REMINDER_TITLE = "💧 Hydration Time!"
GOAL_REACHED_TITLE = "Goal Reached! 🎉"
GOAL_REACHED_BODY = "Congratulations! You've reached your daily water intake goal!"

REMINDER_MESSAGES = [
    "Time to drink water! Your body will thank you.",
    "Hydration check! Grab your water bottle.",
    "Water break! Stay hydrated, stay healthy.",
    "Reminder: Drink some water to feel your best!",
    "Your daily water goal is waiting! Take a sip now.",
    "Feeling tired? Try drinking some water!",
    "Staying hydrated improves your mood and energy!",
    "Take a moment to hydrate yourself!",
    "Water is your superpower! Drink up!",
    "Your cells are thirsty! Drink some water now.",
]


def random_reminder_message(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(REMINDER_MESSAGES)
