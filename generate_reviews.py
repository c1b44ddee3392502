import argparse
import random

import pandas as pd
from faker import Faker

import config

fake = Faker()

# Movie review templates
positive_phrases = [
    "I loved {title}! {name} was amazing.", "Absolutely fantastic film, {title} is a must see.",
    "{title} is the best movie I've seen this year.", "{name} gives a career-best performance in {title}.",
    "{title} exceeded my expectations!", "Worth every penny of the ticket price.",
]
neutral_phrases = [
    "{title} was okay.", "It's fine, nothing special.",
    "An average movie with a few good scenes.", "Not bad, not great.",
    "{name} does what the script asks, no more.", "Watchable once, I guess.",
]
negative_phrases = [
    "I hated {title}.", "Terrible pacing and a lazy script.",
    "{title} is the worst movie I've sat through.", "Avoid {title} at all costs!",
    "Total waste of two hours.", "Even {name} could not save {title}.",
]


def make_review(rng: random.Random) -> dict:
    sentiment = rng.choices(["positive", "neutral", "negative"], weights=[0.4, 0.2, 0.4])[0]
    if sentiment == "positive":
        template = rng.choice(positive_phrases)
    elif sentiment == "neutral":
        template = rng.choice(neutral_phrases)
    else:
        template = rng.choice(negative_phrases)

    title = fake.catch_phrase().title()
    text = template.format(title=f"'{title}'", name=fake.name())
    return {"text": text, "expected": sentiment}


def main():
    parser = argparse.ArgumentParser(description="Generate a sample review corpus (TSV)")
    parser.add_argument("--count", type=int, default=1000, help="Number of reviews (default: 1000)")
    parser.add_argument("--output", default=config.REVIEWS_PATH, help=f"Output path (default: {config.REVIEWS_PATH})")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    if args.seed is not None:
        Faker.seed(args.seed)

    df = pd.DataFrame([make_review(rng) for _ in range(args.count)])
    df.to_csv(args.output, sep="\t", index=False)
    print(f"Generated {args.output} with {len(df)} reviews.")


if __name__ == "__main__":
    main()
