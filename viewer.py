# FOLDER: /

# viewer.py

"""
================================================================================
LIVE PLANET VIEWER
================================================================================
A small pygame front end for the planet runtime. The settings panel on the
right edits the planet configuration live; every edit produces a new
PlanetConfig and the simulation regenerates the planet on its next update.

Controls:
- Rotate: Arrow keys
- Zoom: Mouse Wheel
- Change Simulation Speed: 1 (Paused), 2 (Normal), 3 (Fast)
- Quit: ESC or close window
================================================================================
"""

import sys
import os
import json
import logging
import logging.config
import math
import numpy as np
import pygame
import pygame_gui

from planet_generator.settings import PlanetConfig, ConfigurationError
from planet_generator.gravity import GravitySolver
from planet_generator.runtime import (
    Simulation,
    SimulationClock,
    PlanetLifecycle,
    MeshStore,
    ConvexHullColliderBuilder,
    SemiImplicitEulerIntegrator,
    ColliderConstructionError,
)

# --- UI Constants ---
UI_PANEL_WIDTH = 320
UI_ELEMENT_HEIGHT = 25
UI_SLIDER_HEIGHT = 25
UI_PADDING = 10

# --- Camera Constants ---
ROTATE_SPEED_RADIANS = 0.03
ZOOM_SPEED = 0.1
MAX_ZOOM = 2000.0
MIN_ZOOM = 20.0

# --- Rendering Constants ---
BACKGROUND_COLOR = (10, 10, 20)
LOW_COLOR = np.array([40, 80, 200])
HIGH_COLOR = np.array([90, 200, 90])
BODY_COLOR = (230, 230, 230)

# (field, label, value range, is integer)
SLIDERS = [
    ('seed', "Seed", (0, 9999), True),
    ('resolution', "Resolution", (2, 96), True),
    ('layers', "Layers", (1, 8), True),
    ('base_roughness', "Base Roughness", (0.1, 5.0), False),
    ('roughness', "Roughness", (1.0, 4.0), False),
    ('persistence', "Persistence", (0.0, 1.0), False),
    ('strength', "Strength", (0.0, 1.0), False),
    ('minimum', "Minimum", (0.0, 2.0), False),
]

class OrbitCamera:
    """Looks at the origin from a yaw/pitch orbit and projects orthographically."""
    def __init__(self, screen_width, screen_height, zoom=200.0):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.yaw = 0.6
        self.pitch = 0.4
        self.zoom = zoom

    def rotate(self, d_yaw, d_pitch):
        self.yaw += d_yaw
        self.pitch = max(-1.54, min(1.54, self.pitch + d_pitch))

    def zoom_in(self):
        self.zoom = min(MAX_ZOOM, self.zoom * (1 + ZOOM_SPEED))

    def zoom_out(self):
        self.zoom = max(MIN_ZOOM, self.zoom * (1 - ZOOM_SPEED))

    def project(self, points: np.ndarray) -> tuple:
        """Returns (screen_xy, depth) for (N, 3) world points."""
        cy, sy = math.cos(self.yaw), math.sin(self.yaw)
        cp, sp = math.cos(self.pitch), math.sin(self.pitch)
        yaw_matrix = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
        pitch_matrix = np.array([[1, 0, 0], [0, cp, -sp], [0, sp, cp]])
        view = points @ (pitch_matrix @ yaw_matrix).T

        screen_x = view[:, 0] * self.zoom + self.screen_width / 2
        screen_y = -view[:, 1] * self.zoom + self.screen_height / 2
        return np.column_stack((screen_x, screen_y)), view[:, 2]

class ViewerApp:
    """The main application class for the live planet viewer."""
    def __init__(self, config_path: str = 'config.json'):
        self._setup_logging()
        self.config = self._load_config(config_path)

        pygame.init()
        display = self.config.get('display', {})
        self.screen_width = display.get('screen_width', 1280)
        self.screen_height = display.get('screen_height', 720)
        self.tick_rate = display.get('clock_tick_rate', 60)
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Planet Viewer")
        self.clock = pygame.time.Clock()
        self.is_running = True

        # --- Core Components ---
        sim_config = self.config.get('simulation', {})
        self.planet_config = PlanetConfig.from_dict(self.config.get('planet_generation_parameters', {}))
        self.mesh_store = MeshStore()
        solver = GravitySolver()
        lifecycle = PlanetLifecycle(
            solver,
            self.mesh_store,
            ConvexHullColliderBuilder(),
            density=sim_config.get('density', 1.0),
        )
        self.simulation = Simulation(lifecycle, solver, SemiImplicitEulerIntegrator(), SimulationClock(sim_config))
        for body in sim_config.get('bodies', []):
            self.simulation.add_body(
                body['position'], body['mass'],
                velocity=body.get('velocity', (0.0, 0.0, 0.0)),
                name=body.get('name', 'body'),
            )

        view_width = self.screen_width - UI_PANEL_WIDTH
        self.camera = OrbitCamera(view_width, self.screen_height)
        self._setup_ui()

    def _setup_logging(self):
        """Initializes the logging system from a config file."""
        log_config_path = 'logging_config.json'
        log_dir = 'logs'
        if not os.path.isfile(log_config_path):
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
            self.logger = logging.getLogger(__name__)
            return

        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        with open(log_config_path, 'rt') as f:
            log_config = json.load(f)
        log_config['handlers']['file']['filename'] = os.path.join(log_dir, 'viewer.log')
        logging.config.dictConfig(log_config)
        self.logger = logging.getLogger(__name__)

    def _load_config(self, config_path: str) -> dict:
        """Loads simulation parameters from the config file."""
        self.logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_path, 'r') as f:
                return json.load(f)
        except FileNotFoundError:
            self.logger.warning(f"Configuration file not found at {config_path}. Using defaults.")
            return {}
        except json.JSONDecodeError:
            self.logger.critical(f"Error decoding JSON from {config_path}. Exiting.")
            sys.exit(1)

    def _setup_ui(self):
        """Initializes the pygame_gui manager and creates the settings panel."""
        self.ui_manager = pygame_gui.UIManager((self.screen_width, self.screen_height))
        panel_rect = pygame.Rect(self.screen_width - UI_PANEL_WIDTH, 0, UI_PANEL_WIDTH, self.screen_height)
        self.ui_panel = pygame_gui.elements.UIPanel(
            relative_rect=panel_rect,
            manager=self.ui_manager,
            starting_height=1
        )

        current_y = UI_PADDING
        element_width = UI_PANEL_WIDTH - (3 * UI_PADDING)
        self.sliders = {}
        for field_name, label, value_range, is_integer in SLIDERS:
            pygame_gui.elements.UILabel(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_ELEMENT_HEIGHT),
                text=label,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            current_y += UI_ELEMENT_HEIGHT

            slider = pygame_gui.elements.UIHorizontalSlider(
                relative_rect=pygame.Rect(UI_PADDING, current_y, element_width, UI_SLIDER_HEIGHT),
                start_value=getattr(self.planet_config, field_name),
                value_range=value_range,
                manager=self.ui_manager,
                container=self.ui_panel
            )
            self.sliders[slider] = (field_name, is_integer)
            current_y += UI_SLIDER_HEIGHT + UI_PADDING

    def run(self):
        """The main application loop."""
        try:
            while self.is_running:
                time_delta = self.clock.tick(self.tick_rate) / 1000.0
                self.handle_events()
                self.update(time_delta)
                self.draw()
        finally:
            self.simulation.shutdown()
            self.logger.info("Exiting viewer.")
            pygame.quit()

    def handle_events(self):
        """Processes user input and settings panel events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_1:
                    self.simulation.set_game_speed(0.0)
                elif event.key == pygame.K_2:
                    self.simulation.set_game_speed(1.0)
                elif event.key == pygame.K_3:
                    self.simulation.set_game_speed(4.0)
            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.camera.zoom_in()
                elif event.y < 0:
                    self.camera.zoom_out()
            elif event.type == pygame_gui.UI_HORIZONTAL_SLIDER_MOVED:
                slider_info = self.sliders.get(event.ui_element)
                if slider_info:
                    field_name, is_integer = slider_info
                    value = int(round(event.value)) if is_integer else float(event.value)
                    self.planet_config = self.planet_config.with_changes(**{field_name: value})

            self.ui_manager.process_events(event)

    def update(self, time_delta: float):
        """Handles continuous input and advances the simulation."""
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.rotate(-ROTATE_SPEED_RADIANS, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.rotate(ROTATE_SPEED_RADIANS, 0)
        if keys[pygame.K_UP]:
            self.camera.rotate(0, ROTATE_SPEED_RADIANS)
        if keys[pygame.K_DOWN]:
            self.camera.rotate(0, -ROTATE_SPEED_RADIANS)

        try:
            self.simulation.update(time_delta, self.planet_config)
        except (ConfigurationError, ColliderConstructionError) as e:
            # The previous planet is still active; go back to its settings.
            self.logger.error(f"Rejected planet settings: {e}")
            last_config = self.simulation.lifecycle.last_config
            if last_config is None:
                self.logger.critical("No valid planet could be generated. Exiting.", exc_info=True)
                self.is_running = False
            else:
                self.planet_config = last_config

        self.ui_manager.update(time_delta)

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(BACKGROUND_COLOR)

        instance = self.simulation.lifecycle.instance
        if instance is not None:
            self._draw_planet(instance)
        self._draw_bodies()

        self.ui_manager.draw_ui(self.screen)
        pygame.display.set_caption(
            f"Planet Viewer | {self.simulation.clock.get_time_string()} | "
            f"Seed {self.planet_config.seed} | Bodies: {len(self.simulation.bodies)}"
        )
        pygame.display.flip()

    def _draw_planet(self, instance):
        mesh = self.mesh_store.get(instance.mesh_handle)
        points = mesh.positions * instance.config.scale + instance.body.position
        screen_xy, depth = self.camera.project(points)

        # Colour by radial height. Only the hemisphere facing the camera is drawn, nearest last.
        radii = np.linalg.norm(mesh.positions, axis=1)
        span = max(float(radii.max() - radii.min()), 1e-9)
        t = ((radii - radii.min()) / span)[:, np.newaxis]
        colors = (LOW_COLOR * (1 - t) + HIGH_COLOR * t).astype(int)

        for i in np.argsort(depth):
            if depth[i] < 0:
                continue
            x, y = screen_xy[i]
            self.screen.fill(tuple(colors[i]), (int(x), int(y), 2, 2))

    def _draw_bodies(self):
        planet_body = self.simulation.lifecycle.body
        for body in self.simulation.bodies:
            if body is planet_body:
                continue
            screen_xy, _ = self.camera.project(body.position[np.newaxis, :])
            x, y = screen_xy[0]
            pygame.draw.circle(self.screen, BODY_COLOR, (int(x), int(y)), 4)

if __name__ == '__main__':
    app = ViewerApp(sys.argv[1] if len(sys.argv) > 1 else 'config.json')
    app.run()
