# =============================================================================
# Cyber Duel - Command Line Interface
# =============================================================================
"""
Simple CLI for playing against the AI defender, watching demo games and
serving the API.
"""

import argparse
import sys

from .core import GameConfig, GameError, PlayerRole
from .session import GameSession, play_demo_game


def print_header():
    """Print game header"""
    print("\n" + "=" * 60)
    print("   CYBER DUEL")
    print("   Turn-based Attacker vs AI Defender")
    print("=" * 60 + "\n")


def security_bar(session: GameSession, width: int = 30) -> str:
    config = session.config
    span = config.max_security - config.min_security
    filled = int(round((session.state.security_level - config.min_security) / span * width))
    return "[" + "#" * filled + "." * (width - filled) + "]"


def print_state(session: GameSession):
    """Print current game state"""
    state = session.state
    print(f"\n{'='*50}")
    print(f"Turn {state.turn} | {state.current_player.name}'s Turn")
    print(f"{'='*50}")
    print(f"Security: {security_bar(session)} {state.security_level:.1f}")
    print(f"Resources: Attacker: {state.attacker.resources:g} | "
          f"Defender: {state.defender.resources:g}")


def print_attacks(session: GameSession):
    """Print the attack catalog with affordability"""
    print("\nAvailable Attacks:")
    for attack in session.attacks:
        affordable = session.state.attacker.can_afford(attack.cost)
        marker = " " if affordable else "x"
        print(f"  [{attack.id}]{marker} {attack.name:<18} cost {attack.cost}  "
              f"damage {attack.damage:g} @ {attack.effectiveness:.0%}  ({attack.category})")


def interactive_game(seed: int = None):
    """Run an interactive game session with the human as attacker"""
    print_header()
    session = GameSession(config=GameConfig(seed=seed))

    while not session.is_game_over():
        print_state(session)

        if session.state.current_player == PlayerRole.DEFENDER:
            try:
                _, summary = session.apply_defense()
            except GameError as e:
                print(f"\nDefender is stuck: {e.message}")
                break
            print(f"\n-> {summary.message}")
            continue

        print_attacks(session)
        choice = input("\nEnter attack id (or 'q' to quit): ").strip()

        if choice.lower() == 'q':
            print("Game ended by player.")
            break

        try:
            session.apply_attack(int(choice))
            outcome = session.outcomes[-1]
            print(f"\n-> {outcome.move.name} hit for {outcome.applied_effect:.1f}")
        except ValueError:
            print("Please enter a valid number")
        except GameError as e:
            print(f"Rejected: {e.message}")

    if session.is_game_over():
        print(f"\n{'='*60}")
        print("GAME OVER!")
        print(f"{'='*60}")
        print(f"Winner: {session.get_winner().name}")
        print(f"Victory: {session.state.victory_condition}")


def demo_game(seed: int = None):
    """Run a quick demo with a random attacker"""
    print_header()
    print("Running random attacker vs MinMax defender...")

    result = play_demo_game(config=GameConfig(seed=seed))

    print(f"\n{'='*50}")
    print("Demo Game Results:")
    print(f"{'='*50}")
    for move in result["moves"]:
        print(f"  Turn {move['turn']:3d} {move['role']:<8} {move['move']:<28} {move['effect']:6.2f}")
    print(f"\nWinner: {result['winner'] or 'none (stalled)'}")
    print(f"Victory: {result['victory_condition']}")
    print(f"Turns: {result['turns']}")
    print(f"Final security: {result['security_level']:.1f}")


def serve(host: str = None, port: int = None):
    """Run the HTTP API"""
    from .api.main import run

    run(host=host, port=port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cyberduel", description="Cyber Duel")
    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play as the attacker against the AI")
    play.add_argument("--seed", type=int, default=None)

    demo = subparsers.add_parser("demo", help="Watch a random attacker face the AI")
    demo.add_argument("--seed", type=int, default=None)

    server = subparsers.add_parser("serve", help="Run the HTTP API")
    server.add_argument("--host", default=None)
    server.add_argument("--port", type=int, default=None)

    return parser


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.command == "play":
        interactive_game(seed=args.seed)
    elif args.command == "demo":
        demo_game(seed=args.seed)
    elif args.command == "serve":
        serve(host=args.host, port=args.port)
    else:
        print_header()
        print("Options:")
        print("  1. Play Interactive Game")
        print("  2. Run Demo (Random Attacker)")
        print("  3. Exit")

        choice = input("\nChoice [1-3]: ").strip()

        if choice == "1":
            interactive_game()
        elif choice == "2":
            demo_game()
        elif choice == "3":
            print("Goodbye!")
        else:
            print("Invalid choice")
    return 0


if __name__ == "__main__":
    sys.exit(main())
