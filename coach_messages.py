"""Coach Kai's personalized closing message, picked by score band."""

from __future__ import annotations

import random
from typing import Optional

from metric_formatter import classify

MESSAGES = {
    "excellent": (
        "Wow, {first_name}! This is exceptional performance! Your technique and court awareness are truly impressive. Keep this momentum going and you'll be unstoppable! \U0001F31F",
        "Outstanding work, {first_name}! You're playing at a really high level. Your consistency and shot selection are on point. This is what championship-level pickleball looks like! \U0001F3C6",
        "{first_name}, I'm genuinely impressed! Your game is firing on all cylinders. The way you're controlling the court and executing shots is elite-level stuff. Keep pushing! \U0001F48E",
        "Incredible performance, {first_name}! You're demonstrating mastery in multiple areas. This is the kind of play that wins tournaments. Stay focused and keep dominating! ⭐",
    ),
    "very_good": (
        "Great job, {first_name}! You're playing some solid pickleball here. Your fundamentals are strong, and I can see the hard work paying off. Let's build on this! \U0001F4AA",
        "{first_name}, this is really good stuff! Your game is coming together nicely. Focus on those improvement areas and you'll be at the next level soon! \U0001F680",
        "Nice work, {first_name}! I'm seeing a lot of positives in your game. You're making smart decisions and executing well. Keep this trajectory going! \U0001F4C8",
        "Solid performance, {first_name}! Your technique is developing beautifully. Stay committed to those practice drills and you'll see even more improvement! \U0001F3AF",
    ),
    "good": (
        "Good effort, {first_name}! You're on the right track. I can see areas where you're improving, and that's what matters. Let's work on refining those key skills! \U0001F4CA",
        "{first_name}, you're making progress! Your game has some strong foundations. Focus on the areas for improvement and you'll see significant gains soon! \U0001F331",
        "Nice job, {first_name}! You're showing potential in several areas. Remember, every great player started exactly where you are. Keep practicing! \U0001F49A",
        "{first_name}, this is a solid baseline to work from. I can see what you're doing well and where we need to focus. Let's turn those weaknesses into strengths! \U0001F528",
    ),
    "needs_work": (
        "Hey {first_name}, don't get discouraged! Everyone starts somewhere, and the fact that you're analyzing your game shows you're serious about improving. Let's focus on the fundamentals and build from there! \U0001F31F",
        "{first_name}, I appreciate your commitment to getting better! The areas for improvement we've identified are totally fixable. Let's create a focused practice plan and watch your game transform! \U0001F4AA",
        "{first_name}, here's the truth: Every champion was once a beginner. You're taking the right steps by analyzing your game. Stay patient, work on the basics, and trust the process! \U0001F680",
        "Good on you for putting yourself out there, {first_name}! The video analysis shows us exactly what to work on. With consistent practice on these fundamentals, you're going to see major improvements! \U0001F3AF",
    ),
}


def message_pool(score: float) -> tuple[str, ...]:
  """Return the uninterpolated templates for the score's band."""
  return MESSAGES[classify(score).key]


def pick_message(
    first_name: str,
    score: float,
    rng: Optional[random.Random] = None,
    index: Optional[int] = None,
) -> str:
  """Pick one coaching message for the score band.

  An explicit ``index`` wins (taken modulo the pool size); otherwise one
  draw is taken from ``rng``; with neither, the first message is used.
  """
  pool = message_pool(score)
  if index is not None:
    choice = index % len(pool)
  elif rng is not None:
    choice = rng.randrange(len(pool))
  else:
    choice = 0
  return pool[choice].format(first_name=first_name)
