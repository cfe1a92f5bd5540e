import os
import random

import click

from game2048 import db
from game2048.services.game import preferences
from game2048.services.game.session import GameSession
from game2048.services.leaderboard import get_leaderboard_events, leaderboard_page, submit

KEY_MAPPING = {
    'w': 'up',
    'a': 'left',
    's': 'down',
    'd': 'right',
}

TOP_ENTRIES = 5


def render_board(session: GameSession) -> str:
    width = max(4, len(str(session.max_tile)))
    lines = [f"score={session.score} best={session.best_score} moves={session.moves}"]
    for row in session.board:
        lines.append(' '.join(str(v if v else '.').rjust(width) for v in row))
    return '\n'.join(lines)


def play_session(session: GameSession, read_line, echo) -> bool:
    """Drive ``session`` from text commands until it ends.

    Returns True when the game reached a terminal board, False when the
    player quit or input ran out.
    """
    if session.phase == 'idle':
        session.new_game()
    echo(render_board(session))
    while session.phase != 'over':
        if session.phase == 'won':
            echo('You reached the winning tile! [c] keep playing, [q] quit')
        try:
            key = read_line().strip().lower()
        except EOFError:
            return False
        if key == 'q':
            return False
        if key == 'c':
            session.keep_playing()
            continue
        if key in KEY_MAPPING and session.move(KEY_MAPPING[key]):
            echo(render_board(session))
    echo('Game over!')
    return True


def _echo_top(_result=None):
    page = leaderboard_page(TOP_ENTRIES, 1)
    click.echo('Leaderboard:')
    for entry in page.entries:
        click.echo(f"  #{entry['rank']} {entry['playerName']} {entry['score']}")


def register_commands(flask_app):

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database with an empty global stats row."""
        from game2048.models import GameStats, GLOBAL_STATS_ID
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            db.session.add(GameStats(id=GLOBAL_STATS_ID))
            db.session.commit()
            click.echo('Database has been reset!')

    @click.command('delete-players')
    @click.argument('names', nargs=-1, required=True)
    def delete_players_command(names):
        """Deletes the named players together with their scores."""
        from game2048.models import Player
        with flask_app.app_context():
            for name in names:
                player = Player.query.filter_by(name=name).first()
                if not player:
                    click.echo(f'No player named {name!r}')
                    continue
                db.session.delete(player)
                db.session.commit()
                flask_app.logger.info(f"[delete-players] deleted player={name!r}")
                click.echo(f'Deleted player {name!r}')

    @click.command('play')
    @click.option('--name', default=None, help='Name to submit the final score under.')
    @click.option('--seed', type=int, default=None, help='Seed for tile spawning.')
    @click.option('--prefs', 'prefs_path', default=None, help='Preference file (player name, best score).')
    def play_command(name, seed, prefs_path):
        """Plays a game in the terminal: w/a/s/d to move, c to keep playing after a win, q to quit."""
        prefs_path = prefs_path or os.path.join(flask_app.instance_path, 'preferences.json')
        prefs = preferences.JsonFilePreferenceStore(prefs_path)
        session = GameSession(
            rng=random.Random(seed) if seed is not None else None,
            best_score=prefs.get(preferences.BEST_SCORE, 0),
            win_tile=int(flask_app.config.get('WIN_TILE', 2048)),
        )

        finished = play_session(session, input, click.echo)
        prefs.set(preferences.BEST_SCORE, session.best_score)
        if not finished:
            return

        player_name = name or prefs.get(preferences.PLAYER_NAME) or click.prompt('Your name')
        prefs.set(preferences.PLAYER_NAME, player_name)
        with flask_app.app_context():
            events = get_leaderboard_events()
            dispose = events.subscribe(_echo_top)
            try:
                result = submit(player_name, session.summary())
                if result.accepted:
                    click.echo(f'New best! Rank #{result.rank}')
                else:
                    click.echo(f'Score not saved - not higher than your best (rank #{result.rank})')
                events.emit(result)
            finally:
                dispose()

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(delete_players_command)
    flask_app.cli.add_command(play_command)
