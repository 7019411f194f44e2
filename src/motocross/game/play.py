# src/motocross/game/play.py
import sys, argparse, logging
import pygame
from pygame import K_UP, K_DOWN, K_LEFT, K_RIGHT, K_SPACE, K_ESCAPE, K_p, K_r, K_n
from .config import WIDTH, HEIGHT, FPS, COLOR_FG, SEED_DEFAULT
from .events import EventKind
from .render import draw_snapshot
from .simulation import Simulation, SimState
from .vehicle import Controls

logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Track seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", default="WARNING",
                   help="Python logging level (DEBUG shows every spawn).")
    return p.parse_args()


def run():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals TrackGenerator to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Motocross — playable baseline")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    sim = Simulation(launch_seed)
    jump_pressed = False
    banner = ""
    banner_timer = 0.0

    while True:
        delta_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_UP:
                    jump_pressed = True
                if event.key == K_p:
                    sim.toggle_pause()
                if event.key == K_r and not sim.alive:
                    # Restart SAME seed
                    sim.reset(sim.seed)
                if event.key == K_n and not sim.alive:
                    # Restart with NEW RANDOM seed
                    sim.reset(None)

        keys = pygame.key.get_pressed()
        controls = Controls(
            left=keys[K_LEFT], right=keys[K_RIGHT], jump=jump_pressed,
            crouch=keys[K_DOWN], turbo=keys[K_SPACE],
        )
        jump_pressed = False

        frame = sim.tick(delta_ms, controls)
        for ev in frame.of_kind(EventKind.SPECIAL_COMBO):
            banner = f"{ev.data['combo']}!  +{ev.points}"
            banner_timer = 1500.0
        banner_timer -= delta_ms

        # --- Render ---
        snap = sim.snapshot()
        draw_snapshot(screen, snap)

        c = snap.combo
        combo_txt = f"{c.streak}x ({c.multiplier:.1f}x)" if c.streak > 1 else "0x"
        hud = (f"Seed: {sim.seed}   Score: {snap.score}   Speed: {int(snap.vehicle.speed * 10)}"
               f"   Combo: {combo_txt}   Diff: {snap.difficulty:.1f}")
        screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
        screen.blit(font.render("←/→ brake/gas | ↑ jump | ↓ crouch | SPACE turbo | P pause | ESC quit",
                                True, (60, 70, 90)), (12, 32))
        if banner_timer > 0:
            txt = font.render(banner, True, (200, 0, 200))
            screen.blit(txt, ((WIDTH - txt.get_width()) // 2, HEIGHT // 3))

        if snap.state is SimState.PAUSED:
            txt = font.render("PAUSED (P)", True, COLOR_FG)
            screen.blit(txt, ((WIDTH - txt.get_width()) // 2, HEIGHT // 2))
        elif snap.state is SimState.GAME_OVER:
            txt = font.render(f"CRASH!  Score {snap.score}   Restart (R) | New Random (N)", True, COLOR_FG)
            screen.blit(txt, ((WIDTH - txt.get_width()) // 2, HEIGHT // 2))

        pygame.display.flip()


if __name__ == "__main__":
    run()
