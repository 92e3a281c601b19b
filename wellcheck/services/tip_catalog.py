"""The fixed tip catalog inserted into an empty ``tips`` table.

Five tips per category. Order matters only for display: listings sort
newest first, and seeded tips share a timestamp, so ties fall back to
insertion order.
"""
from __future__ import annotations

DEFAULT_TIPS: list[dict[str, str]] = [
    # Stress
    {
        "title": "Deep Breathing",
        "description": (
            "Practise deep breathing for 5 minutes: breathe in for 4 seconds, hold for 4, "
            "breathe out for 6. It lowers stress right away and calms the nervous system."
        ),
        "icon": "breath",
        "color": "#FF5722",
        "category": "Stress",
    },
    {
        "title": "Morning Meditation",
        "description": (
            "Start the day with 10 minutes of meditation. Use an app or simply sit in silence "
            "focusing on your breath. It reduces cortisol and sharpens focus."
        ),
        "icon": "meditation",
        "color": "#9C27B0",
        "category": "Stress",
    },
    {
        "title": "The 5-4-3-2-1 Technique",
        "description": (
            "When anxious, name 5 things you can see, 4 you can touch, 3 you can hear, "
            "2 you can smell and 1 you can taste. It anchors you in the present."
        ),
        "icon": "focus",
        "color": "#795548",
        "category": "Stress",
    },
    {
        "title": "Active Breaks",
        "description": (
            "Every 2 hours of work, take a 5 minute break. Walk, stretch or just breathe. "
            "It keeps stress from piling up."
        ),
        "icon": "pause",
        "color": "#F44336",
        "category": "Stress",
    },
    {
        "title": "Limit the News",
        "description": (
            "Avoid negative news right before bed or right after waking up. Pick set times "
            "to catch up and keep them short."
        ),
        "icon": "news-off",
        "color": "#E91E63",
        "category": "Stress",
    },
    # Sleep
    {
        "title": "Consistent Sleep Schedule",
        "description": (
            "Go to bed and wake up at the same time every day, weekends included. It "
            "regulates your body clock and improves sleep quality."
        ),
        "icon": "moon",
        "color": "#2196F3",
        "category": "Sleep",
    },
    {
        "title": "No Screens Before Bed",
        "description": (
            "Switch off phones, tablets and TVs at least an hour before sleeping. Blue light "
            "interferes with melatonin, the sleep hormone."
        ),
        "icon": "phone-off",
        "color": "#607D8B",
        "category": "Sleep",
    },
    {
        "title": "Dark and Cool Bedroom",
        "description": (
            "Keep the bedroom dark and between 18 and 22 degrees Celsius. The right "
            "environment is essential for restorative sleep."
        ),
        "icon": "bedroom",
        "color": "#3F51B5",
        "category": "Sleep",
    },
    {
        "title": "No Caffeine in the Afternoon",
        "description": (
            "Skip coffee, black tea and energy drinks after 2pm. Caffeine can stay in your "
            "system for up to 8 hours and disturb your night."
        ),
        "icon": "coffee-off",
        "color": "#009688",
        "category": "Sleep",
    },
    {
        "title": "Wind-down Ritual",
        "description": (
            "Build a ritual before bed: read a book, take a warm shower, listen to calm "
            "music. It tells your brain it is time to rest."
        ),
        "icon": "spa",
        "color": "#00BCD4",
        "category": "Sleep",
    },
    # Mood
    {
        "title": "Daily Gratitude",
        "description": (
            "Write down 3 things you are grateful for every day. It lifts your mood, eases "
            "anxiety and builds a sense of wellbeing."
        ),
        "icon": "heart",
        "color": "#E91E63",
        "category": "Mood",
    },
    {
        "title": "Time Outdoors",
        "description": (
            "Spend at least 20 minutes outside every day. Daylight and fresh air noticeably "
            "improve mood and energy."
        ),
        "icon": "sun",
        "color": "#FFC107",
        "category": "Mood",
    },
    {
        "title": "Social Connection",
        "description": (
            "Keep in regular touch with friends and family. Even a short chat can lift your "
            "mood and ease loneliness."
        ),
        "icon": "people",
        "color": "#FF9800",
        "category": "Mood",
    },
    {
        "title": "Uplifting Music",
        "description": (
            "Play your favourite songs when you feel down. Music activates the brain's "
            "reward system and releases dopamine."
        ),
        "icon": "music",
        "color": "#9C27B0",
        "category": "Mood",
    },
    {
        "title": "Acts of Kindness",
        "description": (
            "Do something kind for someone every day. Small acts of kindness increase "
            "happiness and build positive connections."
        ),
        "icon": "kindness",
        "color": "#4CAF50",
        "category": "Mood",
    },
    # Wellness
    {
        "title": "Regular Exercise",
        "description": (
            "Get at least 30 minutes of physical activity a day: a walk, yoga, dancing or "
            "anything you enjoy. Exercise releases endorphins and improves overall wellbeing."
        ),
        "icon": "fitness",
        "color": "#4CAF50",
        "category": "Wellness",
    },
    {
        "title": "Stay Hydrated",
        "description": (
            "Drink at least 8 glasses of water a day. Dehydration causes fatigue and "
            "headaches and affects mood and concentration."
        ),
        "icon": "water",
        "color": "#00BCD4",
        "category": "Wellness",
    },
    {
        "title": "Balanced Diet",
        "description": (
            "Favour whole foods over processed ones. Fruit, vegetables and lean protein give "
            "steady energy and a better mood."
        ),
        "icon": "food",
        "color": "#8BC34A",
        "category": "Wellness",
    },
    {
        "title": "Regular Pauses",
        "description": (
            "Take a 5 minute pause every hour of work. Stand up, stretch, drink water. It "
            "prevents fatigue and improves productivity."
        ),
        "icon": "break",
        "color": "#FF9800",
        "category": "Wellness",
    },
    {
        "title": "Personal Boundaries",
        "description": (
            "Learn to say no when you need to. Healthy boundaries protect your wellbeing and "
            "prevent overload and burnout."
        ),
        "icon": "boundaries",
        "color": "#9E9E9E",
        "category": "Wellness",
    },
]
