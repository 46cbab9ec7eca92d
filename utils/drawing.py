"""
Image generation utilities for team sheets and balance charts.
"""

from io import BytesIO

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from domain.models.team import Team
from utils.formatting import format_one_decimal, sort_for_display

# Discord-like dark theme colors
DISCORD_BG = "#36393F"
DISCORD_DARKER = "#2F3136"
DISCORD_ACCENT = "#5865F2"
DISCORD_GREEN = "#57F287"
DISCORD_RED = "#ED4245"
DISCORD_YELLOW = "#FEE75C"
DISCORD_WHITE = "#FFFFFF"
DISCORD_GREY = "#B9BBBE"

SKILL_COLORS = {
    "Batting": "#57F287",
    "Bowling": "#5865F2",
    "Leadership": "#FEE75C",
}

# Short role tags shown beside names on the team sheet
ROLE_TAGS = {
    "Captain": "(C)",
    "Vice-Captain": "(VC)",
    "Wicketkeeper": "(WK)",
}


def _get_font(size: int = 16) -> ImageFont.FreeTypeFont:
    """Get a font, falling back to default if custom fonts unavailable."""
    try:
        # Try to use DejaVu Sans which is commonly available on Linux
        return ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", size)
    except OSError:
        try:
            # Try Arial on Windows
            return ImageFont.truetype("arial.ttf", size)
        except OSError:
            return ImageFont.load_default()


def _get_text_size(font: ImageFont.FreeTypeFont, text: str) -> tuple[int, int]:
    """Get text dimensions."""
    bbox = font.getbbox(text)
    return (bbox[2] - bbox[0], bbox[3] - bbox[1])


def _rating_color(rating: int) -> str:
    if rating >= 4:
        return DISCORD_GREEN
    if rating >= 3:
        return DISCORD_ACCENT
    if rating >= 2:
        return DISCORD_YELLOW
    return DISCORD_RED


def _empty_image(message: str) -> BytesIO:
    img = Image.new("RGBA", (400, 100), DISCORD_BG)
    draw = ImageDraw.Draw(img)
    draw.text((20, 40), message, fill=DISCORD_GREY, font=_get_font(20))
    fp = BytesIO()
    img.save(fp, format="PNG")
    fp.seek(0)
    return fp


def draw_team_sheet(teams: list[Team]) -> BytesIO:
    """
    Generate a PNG team sheet: one column per team with members and ratings.

    Args:
        teams: Generated teams

    Returns:
        BytesIO containing the PNG image
    """
    if not teams:
        return _empty_image("No teams generated")

    title_font = _get_font(20)
    cell_font = _get_font(15)
    small_font = _get_font(13)

    # Column definitions within a team block: (header, width)
    columns = [("Player", 190), ("Bat", 40), ("Bowl", 44), ("Capt", 44)]
    block_width = sum(c[1] for c in columns)
    gap = 20
    padding = 12
    header_height = 56
    row_height = 28
    footer_height = 30

    max_members = max(t.get_size() for t in teams)
    total_width = padding * 2 + len(teams) * block_width + (len(teams) - 1) * gap
    total_height = padding * 2 + header_height + max_members * row_height + footer_height

    img = Image.new("RGBA", (total_width, total_height), DISCORD_BG)
    draw = ImageDraw.Draw(img)

    for team_index, team in enumerate(teams):
        left = padding + team_index * (block_width + gap)
        y = padding

        draw.text((left + 4, y), team.name, fill=DISCORD_WHITE, font=title_font)
        fairness = f"{format_one_decimal(team.get_fairness_rating())}/5"
        fairness_w = _get_text_size(small_font, fairness)[0]
        draw.text((left + block_width - fairness_w - 4, y + 4), fairness, fill=DISCORD_GREY, font=small_font)

        # Column headers
        x = left
        for header, width in columns:
            draw.text((x + 4, y + 30), header, fill=DISCORD_GREY, font=small_font)
            x += width
        draw.line(
            [(left, y + header_height - 4), (left + block_width, y + header_height - 4)],
            fill=DISCORD_ACCENT,
            width=2,
        )

        y = padding + header_height
        for i, player in enumerate(sort_for_display(team.players)):
            if i % 2 == 1:
                draw.rectangle([(left, y), (left + block_width, y + row_height)], fill=DISCORD_DARKER)

            tags = " ".join(ROLE_TAGS[r] for r in team.get_player_roles(player.id))
            name = player.name if len(player.name) <= 14 else player.name[:12] + ".."
            label = f"{name} {tags}".strip()
            draw.text((left + 4, y + 6), label, fill=DISCORD_WHITE, font=cell_font)

            x = left + columns[0][1]
            for value, (_, width) in zip(
                [player.batting, player.bowling, player.captaincy], columns[1:]
            ):
                text = str(value)
                text_w = _get_text_size(cell_font, text)[0]
                draw.text((x + (width - text_w) // 2, y + 6), text, fill=_rating_color(value), font=cell_font)
                x += width

            y += row_height

        footer_y = padding + header_height + max_members * row_height + 6
        footer = (
            f"Bat {format_one_decimal(team.get_average_batting())}  "
            f"Bowl {format_one_decimal(team.get_average_bowling())}"
        )
        draw.text((left + 4, footer_y), footer, fill=DISCORD_GREY, font=small_font)

    fp = BytesIO()
    img.save(fp, format="PNG")
    fp.seek(0)
    return fp


def draw_team_balance_chart(teams: list[Team]) -> BytesIO:
    """
    Generate a grouped bar chart of per-team batting, bowling and leadership averages.

    Args:
        teams: Generated teams

    Returns:
        BytesIO containing the PNG image
    """
    if not teams:
        fig, ax = plt.subplots(figsize=(6.5, 4), facecolor=DISCORD_BG)
        ax.set_facecolor(DISCORD_DARKER)
        ax.text(0.5, 0.5, "No teams generated", ha="center", va="center", color="white", fontsize=14)
        ax.set_xticks([])
        ax.set_yticks([])
        fp = BytesIO()
        fig.savefig(fp, format="PNG", dpi=100, bbox_inches="tight", facecolor=DISCORD_BG)
        plt.close(fig)
        fp.seek(0)
        return fp

    averages = {
        "Batting": np.array([t.get_average_batting() for t in teams]),
        "Bowling": np.array([t.get_average_bowling() for t in teams]),
        "Leadership": np.array([t.get_average_captaincy() for t in teams]),
    }
    x = np.arange(len(teams))
    bar_width = 0.26

    fig, ax = plt.subplots(figsize=(max(6.5, len(teams) * 1.2), 4), facecolor=DISCORD_BG)
    ax.set_facecolor(DISCORD_DARKER)

    for offset, (label, values) in zip((-1, 0, 1), averages.items()):
        bars = ax.bar(
            x + offset * bar_width,
            values,
            bar_width,
            label=label,
            color=SKILL_COLORS[label],
            edgecolor=DISCORD_BG,
        )
        for bar, value in zip(bars, values):
            ax.text(
                bar.get_x() + bar.get_width() / 2,
                bar.get_height() + 0.05,
                format_one_decimal(value),
                ha="center",
                va="bottom",
                color=DISCORD_GREY,
                fontsize=8,
            )

    # Spread of batting/bowling averages across teams
    batting_spread = float(np.ptp(averages["Batting"]))
    bowling_spread = float(np.ptp(averages["Bowling"]))

    ax.set_xticks(x)
    ax.set_xticklabels([t.name for t in teams], color=DISCORD_GREY)
    ax.set_ylim(0, 5.5)
    ax.set_ylabel("Average rating", color=DISCORD_GREY, fontsize=11)
    ax.tick_params(colors=DISCORD_GREY, labelsize=9)
    for spine in ax.spines.values():
        spine.set_color("#4F545C")

    ax.set_title(
        f"Team Balance (batting spread {format_one_decimal(batting_spread)}, "
        f"bowling spread {format_one_decimal(bowling_spread)})",
        color="white",
        fontsize=12,
        fontweight="bold",
        pad=10,
    )
    ax.legend(loc="upper right", facecolor=DISCORD_DARKER, edgecolor="#4F545C", labelcolor="white", fontsize=8)

    plt.tight_layout()

    fp = BytesIO()
    fig.savefig(fp, format="PNG", dpi=100, bbox_inches="tight", facecolor=DISCORD_BG)
    plt.close(fig)
    fp.seek(0)
    return fp
