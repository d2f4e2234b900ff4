"""
run_tournament.py

Play many full Liar's Dice matches between a fixed line-up of agents and tally the winners.
Each match starts every player with the same number of dice; the loser of every challenge
loses one die and the last player holding dice wins the match.

Usage: python scripts/run_tournament.py --agents bayes,random,random --matches 50 --data-dir data
"""
import os
import argparse
import datetime
from collections import Counter
from typing import List

try:
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    _PLOTTING_AVAILABLE = True
except ImportError:
    plt = None
    _PLOTTING_AVAILABLE = False

from liars_dice.agents import AGENT_MAP
from liars_dice.core.config import GameConfig
from liars_dice.core.match import build_agents, generate_match_id, match_config, play_match, run_matches
from liars_dice.persistence import csv_io, serializer
from liars_dice.persistence.recorder import ConsoleRecorder


def plot_wins(labels: List[str], wins: List[int], matches: int, out_path: str):
    if not _PLOTTING_AVAILABLE:
        print("matplotlib not available; skipping chart")
        return
    win_perc = [100.0 * w / matches if matches else 0.0 for w in wins]
    width = max(6, int(len(labels) * 0.8))
    plt.figure(figsize=(width, 4))
    bars = plt.bar(labels, win_perc, color='C0')
    plt.ylabel('Win percentage (%)')
    plt.ylim(0, 100)
    plt.title(f'Wins over {matches} matches')
    for rect, val in zip(bars, win_perc):
        plt.text(rect.get_x() + rect.get_width() / 2.0, rect.get_height() + 1.0, f"{val:.1f}%", ha='center', va='bottom', fontsize=8)
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def run_tournament(agent_keys: List[str], matches: int, cfg: GameConfig, data_dir: str,
                   workers: int = 1, verbose: bool = False) -> Counter:
    os.makedirs(data_dir, exist_ok=True)
    summary_csv = os.path.join(data_dir, 'match_summary.csv')
    chart_png = os.path.join(data_dir, 'win_percentages.png')

    if workers > 1:
        print(f"Running {matches} matches on {workers} workers...")
        tally = run_matches(agent_keys, cfg, matches, workers=workers)
    else:
        tally = Counter()
        recorder = ConsoleRecorder() if verbose else None
        header = csv_io.get_summary_header()
        for i in range(matches):
            ts = datetime.datetime.now(datetime.timezone.utc).isoformat()
            game_id = generate_match_id(agent_keys, f"{ts}_{i}")
            print(f"Running match {i+1}/{matches}...", end='\n' if verbose else ' ')
            match_cfg = match_config(cfg, i)
            result = play_match(build_agents(agent_keys, match_cfg), match_cfg, recorder=recorder, game_id=game_id)
            tally[result.winner] += 1
            csv_io.append_row_to_csv({
                'game_id': game_id,
                'game_index': i,
                'timestamp': ts,
                'agents': ",".join(agent_keys),
                'winner': result.winner,
                'winner_agent': agent_keys[result.winner],
                'rounds_played': len(result.rounds),
                'starting_dice_per_player': cfg.starting_dice,
                'rejected_actions': result.rejected_actions,
                'rounds': serializer.dumps([str(r) for r in result.rounds]),
            }, summary_csv, header)
            print('done')
        print(f"Match summaries saved to {summary_csv}")

    labels = [f"{seat}:{key}" for seat, key in enumerate(agent_keys)]
    wins = [tally.get(seat, 0) for seat in range(len(agent_keys))]
    for label, w in zip(labels, wins):
        print(f"{label:>16}: {w} wins")
    plot_wins(labels, wins, matches, chart_png)
    if _PLOTTING_AVAILABLE:
        print(f"Win percentage chart: {chart_png}")
    return tally


def parse_agent_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(',') if x.strip()]


def main():
    parser = argparse.ArgumentParser(description='Play full Liar\'s Dice matches and tally the winners')
    parser.add_argument('--agents', type=str, default='bayes,random', help='Comma-separated agent key per seat')
    parser.add_argument('--matches', type=int, default=10, help='Number of matches to play')
    parser.add_argument('--dice', type=int, default=5, help='Starting dice per player')
    parser.add_argument('--seed', type=int, default=None, help='Base RNG seed; each match derives its own')
    parser.add_argument('--workers', type=int, default=1, help='Processes to run matches on')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory to save csv and charts')
    parser.add_argument('--verbose', action='store_true', help='Narrate every round')
    args = parser.parse_args()

    agent_keys = parse_agent_list(args.agents)
    unknown = [a for a in agent_keys if a not in AGENT_MAP]
    if unknown:
        raise SystemExit(f"Unknown agents: {unknown}. Supported: {list(AGENT_MAP.keys())}")
    if len(agent_keys) < 2:
        raise SystemExit("At least two agents are needed")

    cfg = GameConfig(num_players=len(agent_keys), starting_dice=args.dice, rng_seed=args.seed)
    run_tournament(agent_keys, args.matches, cfg, args.data_dir, workers=args.workers, verbose=args.verbose)


if __name__ == '__main__':
    main()
