import argparse
import logging

from engine.controller import GameController
from engine.interface import Interface
from client import game_store, level_store, settings_store
from client.ui_config import LOG_LEVEL_ORDER

logger = logging.getLogger(__name__)

HELP = "commands: m <id> (match), d (draw), u (undo), h (hint), s (save), q (quit)"


class CommandLineInterface(Interface):

    def print_all(self):
        model = self.controller.game_model
        top = model.stack_top
        print(f"Stack: {top.game_str()}        Reserve: {model.reserve_count}"
              f"        Undo: {len(self.controller.undo_manager)}")
        print("---- id --- card -------- x ------ y --")
        # topmost cards first
        for card in sorted(model.playfield_cards, key=lambda c: (c.position.y, c.position.x)):
            mark = "*" if card.clickable else " "
            print(f"{mark} {card.id:4d}    {card.game_str()}    {card.position.x:8.1f} {card.position.y:8.1f}")
        print()

    def on_start(self):
        print("Game started!")
        self.print_all()

    def notify_redraw(self):
        self.print_all()

    def on_win(self):
        print("You win!")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clear the playfield by matching cards one rank apart.")
    parser.add_argument("--level", type=int, default=None, help="Level id to play; the demo layout when missing.")
    parser.add_argument("--slot", type=int, default=None, help="Save slot used by 's' and --resume.")
    parser.add_argument("--resume", action="store_true", help="Resume the game stored in the save slot.")
    parser.add_argument("--log-level", choices=LOG_LEVEL_ORDER, default=None, help="Logging level.")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    settings = settings_store.load_settings()
    logging.basicConfig(
        level=args.log_level or settings["log_level"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    slot = game_store.valid_slot(args.slot if args.slot is not None else settings["save_slot"])

    controller = GameController()
    controller.register_interface(CommandLineInterface())
    if args.resume:
        saved = game_store.load_game(slot)
        if saved is None:
            print(f"No saved game in slot {slot}!")
            return 1
        controller.resume_game(saved.game_model, saved.records, saved.level_id)
    elif args.level is not None:
        level = level_store.load_level(args.level)
        if level is None:
            print(f"Cannot load level {args.level}!")
            return 1
        if not controller.start_game(level).ok:
            print("Invalid level!")
            return 1
        settings["level_id"] = str(args.level)
        settings_store.save_settings(settings)
    else:
        level = level_store.load_level(int(settings["level_id"]))
        if level is None or not controller.start_game(level).ok:
            logger.warning("Level %s from settings is unavailable, playing the demo", settings["level_id"])
            controller.start_game()

    print(HELP)
    while not controller.is_won():
        try:
            command = input().strip().split()
        except EOFError:
            break
        if not command:
            continue
        op = command[0]
        if op == "m":
            try:
                card_id = int(command[1])
            except (IndexError, ValueError):
                print("Invalid card id!")
                continue
            result = controller.handle_playfield_click(card_id)
            if not result.ok:
                print(f"Cannot match: {result.error.value}")
        elif op == "d":
            if not controller.handle_reserve_click().ok:
                print("No card left!")
        elif op == "u":
            if not controller.handle_undo_click().ok:
                print("Cannot undo!")
        elif op == "h":
            ids = controller.game_model.matchable_card_ids()
            if ids:
                print("Matchable: " + " ".join(str(i) for i in ids))
            elif controller.game_model.has_available_move():
                print("Draw from the reserve.")
            else:
                print("No move left, undo or start over.")
        elif op == "s":
            ok = game_store.save_game(controller.game_model, controller.undo_manager, slot, controller.level_id)
            print(f"Saved to slot {slot}." if ok else "Save failed!")
        elif op == "q":
            break
        else:
            print(HELP)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
