"""Entry point for the fulgere lightning ring."""
from __future__ import annotations

from pathlib import Path

import pygame

from fulgere.engine.logger import init_logger
from fulgere.engine.loop import FrameLoop
from fulgere.engine.scene import SceneManager
from fulgere.engine.settings import StormSettings
from fulgere.ui.storm_scene import StormScene


SETTINGS_PATH = Path("settings.json")


def load_settings() -> StormSettings:
    return StormSettings.load(SETTINGS_PATH)


def main() -> None:
    settings = load_settings()
    logger = init_logger(SETTINGS_PATH)
    log = logger.channel("scene")

    pygame.init()
    screen = pygame.display.set_mode(settings.resolution, pygame.RESIZABLE)
    pygame.display.set_caption("Fulgere")
    clock = pygame.time.Clock()

    manager = SceneManager()
    manager.register("storm", StormScene)
    manager.set_context(settings=settings, logger=logger)
    manager.activate("storm", viewport=screen.get_size())

    def process_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                loop.stop()
                return
            if event.type == pygame.VIDEORESIZE:
                manager.resize(event.w, event.h)

    def frame(dt: float) -> None:
        manager.update(dt)
        surface = pygame.display.get_surface()
        manager.render(surface)
        pygame.display.flip()
        clock.tick(settings.max_fps)

    loop = FrameLoop(frame, process_events)

    try:
        loop.run()
    finally:
        manager.shutdown()
        pygame.quit()
        log.info("Rendered %d frames", loop.frames)


if __name__ == "__main__":
    main()
