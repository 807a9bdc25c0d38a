"""Generate sample contest and vote datasets.

Builds contests with fake descriptions and choice names using faker with a
fixed seed, then casts random votes against them. A share of the votes can
be made invalid (unknown contest or unknown choice) to exercise rejection
reporting.

Usage:
    python scripts/generate_sample.py
    python scripts/generate_sample.py --contests 5 --votes 10000 --invalid 0.05
    python scripts/generate_sample.py -o samples/
"""

import argparse
import json
import random
from pathlib import Path

from faker import Faker

DEFAULT_OUTPUT = Path(__file__).parent.parent / "samples"

SEED = 20240611


def generate_contests(fake: Faker, num_contests: int, max_choices: int) -> list[dict]:
    """Generate contest definitions with 2 to max_choices choices each."""
    contests = []
    for contest_id in range(1, num_contests + 1):
        num_choices = fake.random_int(min=2, max=max(2, max_choices))
        names: set[str] = set()
        while len(names) < num_choices:
            names.add(fake.name())
        contests.append({
            "id": contest_id,
            "description": f"{fake.catch_phrase()} Award",
            "choices": [
                {"id": choice_id, "text": name}
                for choice_id, name in enumerate(sorted(names), start=1)
            ],
        })
    return contests


def generate_votes(
    contests: list[dict], num_votes: int, invalid_share: float, rng: random.Random
) -> list[dict]:
    """Cast votes, each choice weighted so contests do not all end in ties."""
    weights = {
        contest["id"]: [rng.random() for _ in contest["choices"]]
        for contest in contests
    }
    unknown_contest = max(c["id"] for c in contests) + 1

    votes = []
    for _ in range(num_votes):
        contest = rng.choice(contests)
        if rng.random() < invalid_share:
            if rng.random() < 0.5:
                votes.append({"contest_id": unknown_contest, "choice_id": 1})
            else:
                unknown_choice = len(contest["choices"]) + 1
                votes.append({"contest_id": contest["id"], "choice_id": unknown_choice})
            continue
        choice = rng.choices(contest["choices"], weights=weights[contest["id"]])[0]
        votes.append({"contest_id": contest["id"], "choice_id": choice["id"]})
    return votes


def main():
    parser = argparse.ArgumentParser(
        description="Generate sample contest and vote JSON files")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output directory (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--contests", type=int, default=3,
                        help="Number of contests (default: 3)")
    parser.add_argument("--max-choices", type=int, default=5,
                        help="Maximum choices per contest (default: 5)")
    parser.add_argument("--votes", type=int, default=1000,
                        help="Number of votes (default: 1000)")
    parser.add_argument("--invalid", type=float, default=0.0,
                        help="Share of invalid votes, 0 to 1 (default: 0)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    args = parser.parse_args()

    if args.contests < 1:
        parser.error("--contests must be at least 1")

    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(args.seed)
    rng = random.Random(args.seed)

    contests = generate_contests(fake, args.contests, args.max_choices)
    votes = generate_votes(contests, args.votes, args.invalid, rng)
    print(f"Generated {len(contests)} contests and {len(votes)} votes")

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    for filename, data in (("contests.json", contests), ("votes.json", votes)):
        path = output_dir / filename
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n",
                        encoding="utf-8")
        print(f"Written to {path}")


if __name__ == "__main__":
    main()
