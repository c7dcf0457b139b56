WHITE = (235, 235, 235)
GREY = (130, 130, 140)
CYAN = (0, 220, 255)
AMBER = (255, 191, 0)
RED = (230, 40, 40)
GREEN = (60, 210, 90)
TRACK = (90, 90, 110)
