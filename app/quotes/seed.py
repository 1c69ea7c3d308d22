from app.mood.lexicon import Mood

SEED_QUOTES = (
    ("Every day is a new beginning. Take a deep breath, smile, and start again.", "Anonymous", Mood.HAPPY),
    ("Happiness is not something ready made. It comes from your own actions.", "Dalai Lama", Mood.HAPPY),
    ("It's okay to feel sad sometimes. Your feelings are valid and this too shall pass.", "Anonymous", Mood.SAD),
    (
        "You are stronger than you think. Even in your darkest moments, "
        "remember that you have overcome challenges before.",
        "Anonymous",
        Mood.SAD,
    ),
    ("Anxiety is temporary. Take one moment at a time and breathe through it.", "Anonymous", Mood.ANXIOUS),
    ("You don't have to control your thoughts. You just have to stop letting them control you.", "Dan Millman", Mood.ANXIOUS),
    (
        "You matter. Your life has value. There are people who care about you, "
        "even when it doesn't feel that way.",
        "Anonymous",
        Mood.SUICIDAL,
    ),
    ("This feeling is temporary. Please reach out for help. You are not alone in this.", "Anonymous", Mood.SUICIDAL),
    ("Sometimes the most productive thing you can do is to simply exist and be present.", "Anonymous", Mood.NEUTRAL),
    ("Not every day needs to be extraordinary. There's beauty in ordinary moments too.", "Anonymous", Mood.NEUTRAL),
)
