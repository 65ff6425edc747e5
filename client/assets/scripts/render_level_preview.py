import argparse
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from client import level_store
from client.ui_config import NUMS, PREVIEW_COLORS, PREVIEW_SCALE, SUIT_NAMES
from engine.card import CardModel
from engine.card_types import CARD_HEIGHT, CARD_WIDTH, PLAYFIELD_HEIGHT, PLAYFIELD_WIDTH
from engine.game_model import GameModel
from engine.generator import generate, generate_demo_model

STACK_BAND = 280
OUT_DIR = Path(__file__).resolve().parents[1] / "previews"


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def to_image_xy(x, y, scale):
    # design space has y pointing up
    return x * scale, (PLAYFIELD_HEIGHT - y) * scale


def draw_card(draw, card: CardModel, cx, cy, scale, font, highlight=False):
    w = CARD_WIDTH * scale
    h = CARD_HEIGHT * scale
    box = (cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2)
    outline = PREVIEW_COLORS["clickable"] if highlight else PREVIEW_COLORS["card_border"]
    draw.rectangle(box, fill=PREVIEW_COLORS["card_front"], outline=outline, width=4 if highlight else 1)
    color = PREVIEW_COLORS["red"] if card.is_red else PREVIEW_COLORS["black"]
    line_h = max(12, int(32 * scale))
    draw.text((box[0] + 6, box[1] + 4), NUMS[card.face], fill=color, font=font)
    draw.text((box[0] + 6, box[1] + 4 + line_h), SUIT_NAMES[card.suit][0], fill=color, font=font)


def render_preview(model: GameModel, out_path, scale=PREVIEW_SCALE) -> Path:
    """Paint the playfield bottom card first, outline clickable cards, and show the stack top below."""
    out_path = Path(out_path)
    width = int(PLAYFIELD_WIDTH * scale)
    height = int((PLAYFIELD_HEIGHT + STACK_BAND) * scale)
    img = Image.new("RGB", (width, height), PREVIEW_COLORS["background"])
    d = ImageDraw.Draw(img)
    font = get_font(max(10, int(28 * scale)))

    for card in sorted(model.playfield_cards, key=lambda c: -c.position.y):
        cx, cy = to_image_xy(card.position.x, card.position.y, scale)
        draw_card(d, card, cx, cy, scale, font, highlight=card.clickable)

    band_y = (PLAYFIELD_HEIGHT + STACK_BAND / 2) * scale
    if model.has_stack_top():
        draw_card(d, model.stack_top, width / 2 - 100 * scale, band_y, scale, font)
    d.text((width / 2 + 40 * scale, band_y), f"reserve: {model.reserve_count}", fill=(255, 255, 255), font=font)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, "PNG")
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a PNG preview of a level's starting layout.")
    parser.add_argument("--level", type=int, default=None, help="Level id; the demo layout when missing.")
    parser.add_argument("--out", type=Path, default=None, help="Output PNG path.")
    args = parser.parse_args(argv)

    if args.level is None:
        model = generate_demo_model()
        name = "demo"
    else:
        level = level_store.load_level(args.level)
        if level is None:
            print(f"Cannot load level {args.level}.")
            return 1
        model = generate(level).value
        name = f"level_{args.level}"
    out = render_preview(model, args.out or OUT_DIR / f"{name}.png")
    print(f"Rendered {out}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
