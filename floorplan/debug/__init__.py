from .overlays import draw_room_overlay, dump_floor_map
