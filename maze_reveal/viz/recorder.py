import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

class VideoRecorder:
    """
    Writes window frames to an mp4, optionally cropped to one area (the maze
    canvas). Completed reveal runs are marked with the frame they ended on.
    """

    def __init__(self, active=False, output_file=None, fps=30, label="maze_reveal", directory="recordings"):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0
        # (run number, frame index) for every finished maze
        self.run_marks = []

        if self.active and not self.output_file:
            os.makedirs(directory, exist_ok=True)
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.output_file = os.path.join(directory, f"{label}_{ts}.mp4")

    def _open_writer(self, size):
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, size)
        if not writer.isOpened():
            logger.warning(f"Cannot open video writer for {self.output_file}, recording disabled")
            self.active = False
            return None
        self.frame_size = size
        logger.info(f"Recording started: {self.output_file} ({size[0]}x{size[1]})")
        return writer

    def capture_frame(self, surface: pygame.Surface, area=None):
        if not self.active:
            return

        if area is not None:
            surface = surface.subsurface(area)
        size = surface.get_size()

        if self.writer is None:
            self.writer = self._open_writer(size)
            if self.writer is None:
                return
        elif size != self.frame_size:
            logger.debug(f"Skipping {size[0]}x{size[1]} frame, recording at {self.frame_size}")
            return

        # (width, height, 3) RGB -> (height, width, 3) BGR
        view = pygame.surfarray.array3d(surface)
        frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
        frame = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

        self.writer.write(frame)
        self.frame_count += 1

    def mark_run(self, run: int):
        if not self.active:
            return
        self.run_marks.append((run, self.frame_count))
        logger.debug(f"Run #{run} finished at frame {self.frame_count}")

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames, {len(self.run_marks)} runs)")
            self.writer = None
